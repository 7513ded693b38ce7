"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service, get_current_user
from src.models.user import User
from src.schemas.auth import AuthResponse, SignInRequest, SignUpRequest, UserResponse
from src.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    user_data: SignUpRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user and return a session token."""
    result = await auth_service.sign_up(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        avatar=user_data.avatar,
    )
    return AuthResponse(token=result.token, user=UserResponse.model_validate(result.user))


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(
    credentials: SignInRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Sign in with email and password."""
    result = await auth_service.sign_in(credentials.email, credentials.password)
    return AuthResponse(token=result.token, user=UserResponse.model_validate(result.user))


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/sign-out")
async def sign_out(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Sign out (client should discard token; tokens stay valid until they expire)."""
    return {"message": "Signed out successfully"}
