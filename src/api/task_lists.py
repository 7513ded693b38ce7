"""Task list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_access_control, get_identity
from src.models.task_list import TaskList
from src.schemas.auth import UserResponse
from src.schemas.task_list import (
    CollaboratorAdd,
    DeleteResponse,
    TaskListCreate,
    TaskListResponse,
    TaskListUpdate,
)
from src.schemas.todo import ToDoCreate, ToDoResponse
from src.services.access import AccessControl
from src.services.identity import IdentityContext
from src.services.task_graph import TaskGraphRepository

router = APIRouter(prefix="/api/v1/task-lists", tags=["task-lists"])


def build_task_list_responses(
    repository: TaskGraphRepository, task_lists: list[TaskList]
) -> list[TaskListResponse]:
    """Attach progress, collaborators and todos to many lists.

    Uses a fixed number of queries regardless of how many lists or
    collaborators there are.
    """
    list_ids = [task_list.id for task_list in task_lists]
    progress = repository.progress_for(list_ids)
    todos = repository.todos_for(list_ids)
    collaborator_ids = repository.collaborator_ids_for(list_ids)

    all_user_ids = [user_id for ids in collaborator_ids.values() for user_id in ids]
    users_by_id = {user.id: user for user in repository.find_users_by_ids(all_user_ids)}

    result = []
    for task_list in task_lists:
        result.append(
            TaskListResponse(
                id=task_list.id,
                title=task_list.title,
                created_at=task_list.created_at,
                progress=progress.get(task_list.id, 0.0),
                users=[
                    UserResponse.model_validate(users_by_id[user_id])
                    for user_id in collaborator_ids.get(task_list.id, [])
                    if user_id in users_by_id
                ],
                todos=[ToDoResponse.model_validate(todo) for todo in todos.get(task_list.id, [])],
            )
        )
    return result


def build_task_list_response(
    repository: TaskGraphRepository, task_list: TaskList
) -> TaskListResponse:
    return build_task_list_responses(repository, [task_list])[0]


@router.get("", response_model=list[TaskListResponse])
def my_task_lists(
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Get all task lists the current user collaborates on."""
    task_lists = access.my_task_lists(identity)
    return build_task_list_responses(access.repository, task_lists)


@router.post("", response_model=TaskListResponse, status_code=status.HTTP_201_CREATED)
def create_task_list(
    list_data: TaskListCreate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Create a new task list with the caller as its first collaborator."""
    task_list = access.create_task_list(identity, list_data.title)
    return build_task_list_response(access.repository, task_list)


@router.get("/{task_list_id}", response_model=TaskListResponse)
def get_task_list(
    task_list_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Get a specific task list."""
    task_list = access.get_task_list(identity, task_list_id)
    return build_task_list_response(access.repository, task_list)


@router.put("/{task_list_id}", response_model=TaskListResponse)
def update_task_list(
    task_list_id: int,
    list_data: TaskListUpdate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Rename a task list."""
    task_list = access.update_task_list(identity, task_list_id, list_data.title)
    return build_task_list_response(access.repository, task_list)


@router.delete("/{task_list_id}", response_model=DeleteResponse)
def delete_task_list(
    task_list_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Delete a task list and its todos."""
    return DeleteResponse(deleted=access.delete_task_list(identity, task_list_id))


@router.post("/{task_list_id}/collaborators", response_model=TaskListResponse)
def add_user_to_task_list(
    task_list_id: int,
    collaborator: CollaboratorAdd,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Invite a user to collaborate; inviting an existing collaborator changes nothing."""
    task_list = access.add_user_to_task_list(identity, task_list_id, collaborator.user_id)
    return build_task_list_response(access.repository, task_list)


@router.get("/{task_list_id}/todos", response_model=list[ToDoResponse])
def list_todos(
    task_list_id: int,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Get all todos of a task list."""
    return access.list_todos(identity, task_list_id)


@router.post(
    "/{task_list_id}/todos", response_model=ToDoResponse, status_code=status.HTTP_201_CREATED
)
def create_todo(
    task_list_id: int,
    todo_data: ToDoCreate,
    identity: Annotated[IdentityContext, Depends(get_identity)],
    access: Annotated[AccessControl, Depends(get_access_control)],
):
    """Add a todo to a task list."""
    return access.create_todo(identity, task_list_id, todo_data.content)
