"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .task import TaskRepository

__all__ = [
    "HabitRepository",
    "TaskRepository",
]
