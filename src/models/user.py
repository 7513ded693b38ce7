"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Identity record for sign-in and list collaboration."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Stored lower-cased, so uniqueness is case-insensitive
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    avatar = Column(String(2048), nullable=True)
