"""Service module exports."""

from . import analytics, dates, habits, productivity, rankings, seed, streaks, tasks

__all__ = [
    "analytics",
    "dates",
    "habits",
    "productivity",
    "rankings",
    "seed",
    "streaks",
    "tasks",
]
