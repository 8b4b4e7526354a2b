"""User model owning tasks and habits."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel


class User(SQLModel, table=True):
    """Owner identity; sign-in is handled outside the application."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)

    tasks = Relationship(
        back_populates="user",
        sa_relationship=relationship("Task", back_populates="user"),
    )
    habits = Relationship(
        back_populates="user",
        sa_relationship=relationship("Habit", back_populates="user"),
    )
