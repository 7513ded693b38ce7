"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, SignInRequest, SignUpRequest, UserResponse
from src.schemas.task_list import (
    CollaboratorAdd,
    DeleteResponse,
    TaskListCreate,
    TaskListResponse,
    TaskListUpdate,
)
from src.schemas.todo import ToDoCreate, ToDoResponse, ToDoUpdate

__all__ = [
    "SignUpRequest",
    "SignInRequest",
    "UserResponse",
    "AuthResponse",
    "TaskListCreate",
    "TaskListUpdate",
    "TaskListResponse",
    "CollaboratorAdd",
    "DeleteResponse",
    "ToDoCreate",
    "ToDoUpdate",
    "ToDoResponse",
]
