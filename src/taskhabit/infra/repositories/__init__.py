"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .task import SQLModelTaskRepository

__all__ = [
    "SQLModelHabitRepository",
    "SQLModelTaskRepository",
]
