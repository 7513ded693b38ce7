"""SQLAlchemy models."""

from src.models.task_list import TaskList, TaskListCollaborator
from src.models.todo import ToDo
from src.models.user import User

__all__ = [
    "User",
    "TaskList",
    "TaskListCollaborator",
    "ToDo",
]
