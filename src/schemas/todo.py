"""ToDo schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ToDoCreate(BaseModel):
    """Create a new todo."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=2000)


class ToDoUpdate(BaseModel):
    """Edit a todo or toggle its completion."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str | None = Field(None, min_length=1, max_length=2000)
    is_completed: bool | None = None


class ToDoResponse(BaseModel):
    """ToDo response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    is_completed: bool
    task_list_id: int
