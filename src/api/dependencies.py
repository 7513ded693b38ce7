"""FastAPI dependencies for identity, services and the database."""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.models.user import User
from src.services.access import AccessControl
from src.services.auth import AuthService, PasswordHasher, TokenService
from src.services.identity import IdentityContext, IdentityResolver
from src.services.task_graph import TaskGraphRepository


@lru_cache
def get_token_service() -> TokenService:
    """Token service bound to the process-wide signing key."""
    settings = get_settings()
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration=timedelta(days=settings.jwt_expiration_days),
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Password hasher configured with the bcrypt work factor."""
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


def get_repository(
    db: Annotated[Session, Depends(get_db)],
) -> TaskGraphRepository:
    """Get task graph repository bound to the request's session."""
    return TaskGraphRepository(db)


def get_identity(
    repository: Annotated[TaskGraphRepository, Depends(get_repository)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> IdentityContext:
    """Resolve the caller once per request; anonymous if the token is unusable."""
    return IdentityResolver(tokens, repository).resolve(authorization)


def get_current_user(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    repository: Annotated[TaskGraphRepository, Depends(get_repository)],
) -> User:
    """Get the current authenticated user, raising AuthenticationError if anonymous."""
    return AccessControl(repository).require_user(identity)


def get_access_control(
    repository: Annotated[TaskGraphRepository, Depends(get_repository)],
) -> AccessControl:
    """Get access control engine with dependencies."""
    return AccessControl(repository)


def get_auth_service(
    repository: Annotated[TaskGraphRepository, Depends(get_repository)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get sign-up / sign-in service with dependencies."""
    return AuthService(repository, hasher, tokens)
