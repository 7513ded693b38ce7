"""ToDo model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class ToDo(Base, TimestampMixin):
    """Checklist item belonging to exactly one task list."""

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    task_list_id = Column(
        Integer, ForeignKey("task_lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(String(2000), nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    task_list = relationship("TaskList", back_populates="todos")
