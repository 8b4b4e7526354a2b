"""Blueprint exports."""

from . import analytics, habits, tasks

__all__ = [
    "analytics",
    "habits",
    "tasks",
]
