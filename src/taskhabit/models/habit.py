"""Habits tracking data structures."""

from __future__ import annotations

import datetime as dt  # module import: HabitLog.date would shadow the date type
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class HabitFrequency(str, Enum):
    """Unit a habit's duration is counted in."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class HabitStatus(str, Enum):
    """Lifecycle states; nothing moves a habit to FAILED automatically yet."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    FAILED = "failed"


class Habit(SQLModel, table=True):
    """A recurring commitment tracked between start_date and end_date."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=120, index=True)
    description: Optional[str] = Field(default=None, max_length=1000)
    frequency: str = Field(default=HabitFrequency.DAILY.value, max_length=16)
    duration: int = Field(default=1, nullable=False)
    start_date: dt.datetime = Field(nullable=False)
    end_date: dt.datetime = Field(nullable=False, index=True)
    status: str = Field(default=HabitStatus.ACTIVE.value, max_length=16, index=True)
    created_at: dt.datetime = Field(default_factory=dt.datetime.now, nullable=False, index=True)
    updated_at: dt.datetime = Field(default_factory=dt.datetime.now, nullable=False)

    logs: list["HabitLog"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitLog", back_populates="habit", cascade="all, delete-orphan"
        ),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))


class HabitLog(SQLModel, table=True):
    """Completion record for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_log"
    __table_args__ = (UniqueConstraint("habit_id", "day", name="uq_habit_log_habit_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    date: dt.datetime = Field(nullable=False, index=True)
    day: dt.date = Field(nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=500)
    created_at: dt.datetime = Field(default_factory=dt.datetime.now, nullable=False)
    updated_at: dt.datetime = Field(default_factory=dt.datetime.now, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="logs",
        sa_relationship=relationship("Habit", back_populates="logs"),
    )
