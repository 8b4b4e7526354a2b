"""Habit repository protocol."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ...models.habit import Habit, HabitLog


class HabitRepository(Protocol):
    """Repository for habits and their daily logs."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID regardless of owner."""
        ...

    def list_all(self, *, user_id: int) -> list[Habit]:
        """List a user's habits, newest first."""
        ...

    def create(self, habit: Habit) -> Habit:
        ...

    def update(self, habit: Habit) -> Habit:
        ...

    def delete(self, habit_id: int) -> None:
        """Delete a habit and all of its logs."""
        ...

    # Habit log operations
    def get_log(self, habit_id: int, day: date) -> Optional[HabitLog]:
        ...

    def logs_for_habit(
        self,
        habit_id: int,
        *,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> list[HabitLog]:
        """Logs of one habit, oldest first, optionally bounded by log instant."""
        ...

    def logs_for_user(
        self,
        *,
        user_id: int,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        completed_only: bool = False,
    ) -> list[HabitLog]:
        ...

    def toggle_log(self, habit_id: int, *, user_id: int, now: datetime) -> HabitLog:
        """Create today's log as completed or flip the existing one, atomically."""
        ...
