"""Storage operations on users, task lists and todos.

Every write is a single commit. Collaborator addition inserts one membership
row guarded by a unique constraint, so two concurrent invitations of the same
user cannot produce a duplicate or lose an update.
"""

from collections.abc import Iterable

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.task_list import TaskList, TaskListCollaborator
from src.models.todo import ToDo
from src.models.user import User
from src.services.errors import ConflictError, NotFoundError


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively."""
    return email.strip().lower()


def compute_progress(completed: int, total: int) -> float:
    """Completed fraction of a list's todos; exactly 0.0 for an empty list."""
    if total <= 0:
        return 0.0
    return completed / total


class TaskGraphRepository:
    """Repository for the User / TaskList / ToDo graph."""

    def __init__(self, db: Session):
        self.db = db

    # Users

    def create_user(
        self, email: str, password_hash: str, name: str, avatar: str | None = None
    ) -> User:
        """Insert a user; raises ConflictError if the email is taken."""
        user = User(
            email=normalize_email(email),
            password_hash=password_hash,
            name=name,
            avatar=avatar,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email already in use") from e
        self.db.refresh(user)
        return user

    def find_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_user_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def find_users_by_ids(self, user_ids: Iterable[int]) -> list[User]:
        """Fetch many users in one query, keeping the order of ``user_ids``.

        Ids with no matching user are skipped.
        """
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        users = self.db.query(User).filter(User.id.in_(ids)).all()
        by_id = {user.id: user for user in users}
        return [by_id[user_id] for user_id in ids if user_id in by_id]

    # Task lists

    def create_task_list(self, creator_id: int, title: str) -> TaskList:
        """Create a list whose sole initial collaborator is the creator."""
        task_list = TaskList(title=title)
        task_list.collaborators.append(TaskListCollaborator(user_id=creator_id))
        self.db.add(task_list)
        self.db.commit()
        self.db.refresh(task_list)
        return task_list

    def find_task_list_by_id(self, task_list_id: int) -> TaskList | None:
        return self.db.get(TaskList, task_list_id)

    def list_task_lists_for_user(self, user_id: int) -> list[TaskList]:
        """All lists the user collaborates on, oldest first."""
        return (
            self.db.query(TaskList)
            .join(TaskListCollaborator, TaskListCollaborator.task_list_id == TaskList.id)
            .filter(TaskListCollaborator.user_id == user_id)
            .order_by(TaskList.id)
            .all()
        )

    def is_collaborator(self, task_list_id: int, user_id: int) -> bool:
        membership = (
            self.db.query(TaskListCollaborator.id)
            .filter(
                TaskListCollaborator.task_list_id == task_list_id,
                TaskListCollaborator.user_id == user_id,
            )
            .first()
        )
        return membership is not None

    def collaborator_ids(self, task_list_id: int) -> list[int]:
        """Collaborator user ids in membership order (creator first)."""
        return self.collaborator_ids_for([task_list_id]).get(task_list_id, [])

    def collaborator_ids_for(self, task_list_ids: Iterable[int]) -> dict[int, list[int]]:
        """Collaborator ids for many lists in one query."""
        ids = list(task_list_ids)
        result: dict[int, list[int]] = {task_list_id: [] for task_list_id in ids}
        if not ids:
            return result
        rows = (
            self.db.query(TaskListCollaborator.task_list_id, TaskListCollaborator.user_id)
            .filter(TaskListCollaborator.task_list_id.in_(ids))
            .order_by(TaskListCollaborator.id)
            .all()
        )
        for task_list_id, user_id in rows:
            result[task_list_id].append(user_id)
        return result

    def update_task_list_title(self, task_list: TaskList, title: str) -> TaskList:
        task_list.title = title
        self.db.commit()
        self.db.refresh(task_list)
        return task_list

    def add_collaborator(self, task_list_id: int, user_id: int) -> bool:
        """Append a collaborator with a single insert.

        Returns False when the user was already a collaborator, including when
        a concurrent request added them first.
        """
        self.db.add(TaskListCollaborator(task_list_id=task_list_id, user_id=user_id))
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.is_collaborator(task_list_id, user_id):
                return False
            # Foreign key failure: the list or the user vanished mid-request
            raise NotFoundError("Task list or user not found") from e
        return True

    def delete_task_list(self, task_list: TaskList) -> None:
        """Delete a list together with its todos and memberships."""
        self.db.delete(task_list)
        self.db.commit()

    # Todos

    def create_todo(self, task_list_id: int, content: str) -> ToDo:
        todo = ToDo(task_list_id=task_list_id, content=content, is_completed=False)
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def find_todo_by_id(self, todo_id: int) -> ToDo | None:
        return self.db.get(ToDo, todo_id)

    def list_todos_for_task_list(self, task_list_id: int) -> list[ToDo]:
        return (
            self.db.query(ToDo).filter(ToDo.task_list_id == task_list_id).order_by(ToDo.id).all()
        )

    def todos_for(self, task_list_ids: Iterable[int]) -> dict[int, list[ToDo]]:
        """Todos of many lists in one query."""
        ids = list(task_list_ids)
        result: dict[int, list[ToDo]] = {task_list_id: [] for task_list_id in ids}
        if not ids:
            return result
        todos = self.db.query(ToDo).filter(ToDo.task_list_id.in_(ids)).order_by(ToDo.id).all()
        for todo in todos:
            result[todo.task_list_id].append(todo)
        return result

    def update_todo(
        self, todo: ToDo, content: str | None = None, is_completed: bool | None = None
    ) -> ToDo:
        if content is not None:
            todo.content = content
        if is_completed is not None:
            todo.is_completed = is_completed
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def delete_todo(self, todo: ToDo) -> None:
        self.db.delete(todo)
        self.db.commit()

    # Progress

    def progress(self, task_list_id: int) -> float:
        return self.progress_for([task_list_id]).get(task_list_id, 0.0)

    def progress_for(self, task_list_ids: Iterable[int]) -> dict[int, float]:
        """Progress of many lists with one grouped count query."""
        ids = list(task_list_ids)
        result = {task_list_id: 0.0 for task_list_id in ids}
        if not ids:
            return result
        counts = (
            self.db.query(
                ToDo.task_list_id,
                func.count(ToDo.id),
                func.sum(case((ToDo.is_completed.is_(True), 1), else_=0)),
            )
            .filter(ToDo.task_list_id.in_(ids))
            .group_by(ToDo.task_list_id)
            .all()
        )
        for task_list_id, total, completed in counts:
            result[task_list_id] = compute_progress(completed or 0, total)
        return result
