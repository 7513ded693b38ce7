"""Task list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.auth import UserResponse
from src.schemas.todo import ToDoResponse


class TaskListCreate(BaseModel):
    """Create a new task list."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)


class TaskListUpdate(BaseModel):
    """Rename a task list."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)


class CollaboratorAdd(BaseModel):
    """Invite a user to a task list."""

    user_id: int


class TaskListResponse(BaseModel):
    """Task list response with derived progress and resolved collaborators."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime
    progress: float = 0.0
    users: list[UserResponse] = []
    todos: list[ToDoResponse] = []


class DeleteResponse(BaseModel):
    """Result of a delete operation."""

    deleted: bool
