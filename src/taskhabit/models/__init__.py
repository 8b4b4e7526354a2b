"""SQLModel table exports."""

from .habit import Habit, HabitFrequency, HabitLog, HabitStatus
from .task import Task, TaskPriority, TaskStatus
from .user import User

__all__ = [
    "Habit",
    "HabitFrequency",
    "HabitLog",
    "HabitStatus",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
]
