"""Access control for task lists and todos.

Rules:
- Anonymous callers fail every operation here with AuthenticationError.
- Creating a list only needs an authenticated caller, who becomes its first
  collaborator.
- Everything scoped to an existing list (reading it, renaming, deleting,
  inviting, adding or editing todos) needs the caller to be a collaborator.
- An unknown list, todo or invitee is NotFoundError, checked before
  membership so "it doesn't exist" stays distinct from "you can't".
"""

import logging

from src.models.task_list import TaskList
from src.models.todo import ToDo
from src.models.user import User
from src.services.errors import AuthenticationError, AuthorizationError, NotFoundError
from src.services.identity import Authenticated, IdentityContext
from src.services.task_graph import TaskGraphRepository

logger = logging.getLogger(__name__)

TASK_LIST_NOT_FOUND = "Task list not found"


class AccessControl:
    """Authorizes and then performs task list / todo operations."""

    def __init__(self, repository: TaskGraphRepository):
        self.repository = repository

    def require_user(self, identity: IdentityContext) -> User:
        """Return the caller, or raise AuthenticationError for anonymous requests."""
        if isinstance(identity, Authenticated):
            return identity.user
        raise AuthenticationError()

    def task_list_for_member(self, identity: IdentityContext, task_list_id: int) -> TaskList:
        """Load a list the caller collaborates on."""
        user = self.require_user(identity)
        task_list = self.repository.find_task_list_by_id(task_list_id)
        if task_list is None:
            raise NotFoundError(TASK_LIST_NOT_FOUND)
        if not self.repository.is_collaborator(task_list.id, user.id):
            logger.warning(f"User {user.id} denied access to task list {task_list_id}")
            raise AuthorizationError()
        return task_list

    def todo_for_member(self, identity: IdentityContext, todo_id: int) -> ToDo:
        """Load a todo whose list the caller collaborates on."""
        user = self.require_user(identity)
        todo = self.repository.find_todo_by_id(todo_id)
        if todo is None:
            raise NotFoundError("ToDo not found")
        if not self.repository.is_collaborator(todo.task_list_id, user.id):
            logger.warning(f"User {user.id} denied access to todo {todo_id}")
            raise AuthorizationError()
        return todo

    # Queries

    def my_task_lists(self, identity: IdentityContext) -> list[TaskList]:
        user = self.require_user(identity)
        return self.repository.list_task_lists_for_user(user.id)

    def get_task_list(self, identity: IdentityContext, task_list_id: int) -> TaskList:
        return self.task_list_for_member(identity, task_list_id)

    def list_todos(self, identity: IdentityContext, task_list_id: int) -> list[ToDo]:
        task_list = self.task_list_for_member(identity, task_list_id)
        return self.repository.list_todos_for_task_list(task_list.id)

    # Mutations

    def create_task_list(self, identity: IdentityContext, title: str) -> TaskList:
        user = self.require_user(identity)
        task_list = self.repository.create_task_list(creator_id=user.id, title=title)
        logger.info(f"User {user.id} created task list {task_list.id}")
        return task_list

    def update_task_list(
        self, identity: IdentityContext, task_list_id: int, title: str
    ) -> TaskList:
        task_list = self.task_list_for_member(identity, task_list_id)
        return self.repository.update_task_list_title(task_list, title)

    def add_user_to_task_list(
        self, identity: IdentityContext, task_list_id: int, user_id: int
    ) -> TaskList:
        """Invite a user; inviting an existing collaborator is a no-op."""
        task_list = self.task_list_for_member(identity, task_list_id)
        if self.repository.find_user_by_id(user_id) is None:
            raise NotFoundError("User not found")

        if self.repository.add_collaborator(task_list.id, user_id):
            logger.info(f"Added user {user_id} to task list {task_list.id}")
        else:
            logger.info(f"User {user_id} is already a collaborator on task list {task_list.id}")

        updated = self.repository.find_task_list_by_id(task_list_id)
        if updated is None:
            raise NotFoundError(TASK_LIST_NOT_FOUND)
        return updated

    def delete_task_list(self, identity: IdentityContext, task_list_id: int) -> bool:
        task_list = self.task_list_for_member(identity, task_list_id)
        self.repository.delete_task_list(task_list)
        logger.info(f"Deleted task list {task_list_id}")
        return True

    def create_todo(self, identity: IdentityContext, task_list_id: int, content: str) -> ToDo:
        task_list = self.task_list_for_member(identity, task_list_id)
        return self.repository.create_todo(task_list.id, content)

    def update_todo(
        self,
        identity: IdentityContext,
        todo_id: int,
        content: str | None = None,
        is_completed: bool | None = None,
    ) -> ToDo:
        todo = self.todo_for_member(identity, todo_id)
        return self.repository.update_todo(todo, content=content, is_completed=is_completed)

    def delete_todo(self, identity: IdentityContext, todo_id: int) -> bool:
        todo = self.todo_for_member(identity, todo_id)
        self.repository.delete_todo(todo)
        return True
