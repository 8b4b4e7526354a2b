"""Task data structures."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Task(SQLModel, table=True):
    """A short-lived unit of work owned by a single user."""

    __tablename__: ClassVar[str] = "task"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=16)
    status: str = Field(default=TaskStatus.PENDING.value, max_length=16, index=True)
    deadline: Optional[datetime] = Field(default=None, index=True)
    # Mirrors status == completed; kept as its own column for cheap filtering.
    completed: bool = Field(default=False, nullable=False, index=True)
    completed_at: Optional[datetime] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="tasks"))
