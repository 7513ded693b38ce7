"""Authentication schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from src.services.auth import MAX_PASSWORD_BYTES

# Passwords are used exactly as typed, never stripped
Password = Annotated[str, StringConstraints(strip_whitespace=False)]


def check_password_size(password: str) -> str:
    """bcrypt only reads the first 72 bytes, so longer passwords are rejected."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


class SignUpRequest(BaseModel):
    """User sign-up request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr = Field(..., max_length=255)
    password: Password = Field(..., min_length=8)
    name: str = Field(..., min_length=1, max_length=255)
    avatar: str | None = Field(None, max_length=2048)

    @field_validator("password")
    @classmethod
    def validate_password_size(cls, v: str) -> str:
        return check_password_size(v)


class SignInRequest(BaseModel):
    """User sign-in request."""

    email: EmailStr = Field(..., max_length=255)
    password: Password = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_size(cls, v: str) -> str:
        return check_password_size(v)


class UserResponse(BaseModel):
    """Public user information; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    avatar: str | None = None


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
    token_type: str = "bearer"  # noqa: S105
