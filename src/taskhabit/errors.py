"""Exception types raised by TaskHabit services."""

from __future__ import annotations


class TaskHabitError(Exception):
    """Base class for domain errors."""


class NotFoundError(TaskHabitError):
    """Requested entity does not exist."""

    entity = "entity"

    def __init__(self, entity_id: int) -> None:
        super().__init__(f"{self.entity.capitalize()} {entity_id} not found")
        self.entity_id = entity_id


class HabitNotFoundError(NotFoundError):
    entity = "habit"


class TaskNotFoundError(NotFoundError):
    entity = "task"


class NotAuthorizedError(TaskHabitError):
    """The caller does not own the target entity."""

    def __init__(self, entity: str, entity_id: int, user_id: int) -> None:
        super().__init__(f"User {user_id} may not modify {entity} {entity_id}")
        self.entity = entity
        self.entity_id = entity_id
        self.user_id = user_id


class InvalidTransitionError(TaskHabitError):
    """A status change is not allowed from the entity's current state."""

    def __init__(self, current: str, target: str, message: str | None = None) -> None:
        super().__init__(message or f"Cannot move from {current!r} to {target!r}")
        self.current = current
        self.target = target


__all__ = [
    "HabitNotFoundError",
    "InvalidTransitionError",
    "NotAuthorizedError",
    "NotFoundError",
    "TaskHabitError",
    "TaskNotFoundError",
]
