"""ToDo API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_access_control, get_identity
from src.schemas.task_list import DeleteResponse
from src.schemas.todo import ToDoResponse, ToDoUpdate
from src.services.access import AccessControl
from src.services.identity import IdentityContext

router = APIRouter(prefix="/api/v1/todos", tags=["todos"])


@router.put("/{todo_id}", response_model=ToDoResponse)
def update_todo(
    todo_id: int,
    todo_data: ToDoUpdate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Edit a todo's content or toggle its completion."""
    return access.update_todo(
        identity,
        todo_id,
        content=todo_data.content,
        is_completed=todo_data.is_completed,
    )


@router.delete("/{todo_id}", response_model=DeleteResponse)
def delete_todo(
    todo_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Delete a todo."""
    return DeleteResponse(deleted=access.delete_todo(identity, todo_id))
