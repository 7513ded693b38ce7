"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api import auth, task_lists, todos
from src.api.dependencies import get_token_service
from src.config import get_settings
from src.services.errors import AuthenticationError, TaskListError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Startup: a missing or unusable signing key aborts startup
    get_token_service()
    logger.info(f"Task list API starting ({settings.environment})")
    yield
    logger.info("Task list API shutting down")


app = FastAPI(
    title="Task List API",
    description="Collaborative task lists with shared membership and JWT sessions",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:8081",
            "http://localhost:19006",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(TaskListError)
async def task_list_error_handler(request: Request, exc: TaskListError) -> JSONResponse:
    """Report domain errors with the same body shape as HTTPException."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


# Register routers
app.include_router(auth.router)
app.include_router(task_lists.router)
app.include_router(todos.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
