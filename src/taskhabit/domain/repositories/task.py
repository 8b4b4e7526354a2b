"""Task repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.task import Task


class TaskRepository(Protocol):
    """Repository for managing task entities."""

    def get_by_id(self, task_id: int) -> Optional[Task]:
        """Retrieve a task by ID regardless of owner."""
        ...

    def list_all(self, *, user_id: int, status: Optional[str] = None) -> list[Task]:
        """List a user's tasks, newest first."""
        ...

    def create(self, task: Task) -> Task:
        ...

    def update(self, task: Task) -> Task:
        ...

    def delete(self, task_id: int) -> None:
        ...

    def with_deadline_between(
        self, *, user_id: int, start: datetime, end: datetime
    ) -> list[Task]:
        """Tasks whose deadline falls in [start, end], ordered by deadline."""
        ...

    def completed_between(
        self, *, user_id: int, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[Task]:
        """Completed tasks whose completion instant falls in the range."""
        ...

    def created_between(
        self, *, user_id: int, start: datetime, end: Optional[datetime] = None
    ) -> list[Task]:
        """Tasks created in [start, end), whatever their status."""
        ...
