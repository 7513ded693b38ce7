"""Task list and collaborator models."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import CreatedAtMixin, TimestampMixin


class TaskList(Base, TimestampMixin):
    """Collaborative container of todos.

    Every list has at least one collaborator: the creator's membership row is
    written in the same transaction as the list itself.
    """

    __tablename__ = "task_lists"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)

    # Relationships
    collaborators = relationship(
        "TaskListCollaborator",
        back_populates="task_list",
        cascade="all, delete-orphan",
        order_by="TaskListCollaborator.id",
    )
    todos = relationship(
        "ToDo",
        back_populates="task_list",
        cascade="all, delete-orphan",
        order_by="ToDo.id",
    )


class TaskListCollaborator(Base, CreatedAtMixin):
    """Membership of a user in a task list.

    Row id order is the collaborator order; the creator's row is always first.
    """

    __tablename__ = "task_list_collaborators"
    __table_args__ = (
        UniqueConstraint("task_list_id", "user_id", name="uq_task_list_collaborator"),
    )

    id = Column(Integer, primary_key=True, index=True)
    task_list_id = Column(
        Integer, ForeignKey("task_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    task_list = relationship("TaskList", back_populates="collaborators")
    user = relationship("User")
