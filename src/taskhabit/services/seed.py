"""Demo data for local development."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlmodel import Session, func, select

from ..logging_config import get_logger
from ..models.habit import Habit, HabitFrequency, HabitStatus
from ..models.task import Task, TaskPriority, TaskStatus
from ..models.user import User
from .dates import calculate_end_date

SessionFactory = Callable[[], Session]

DEFAULT_USERNAME = "local"

logger = get_logger(__name__)


@dataclass(slots=True)
class SeedSummary:
    """Counts for the seeded user after seeding."""

    user_id: int
    tasks: int
    habits: int
    seeded: bool


def ensure_user(session_factory: SessionFactory, username: str = DEFAULT_USERNAME) -> User:
    """Return the user called ``username``, creating it on first use."""

    username = username.strip()
    if not username:
        raise ValueError("Username must not be empty")
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            user = User(username=username)
            session.add(user)
            session.commit()
            session.refresh(user)
        session.expunge(user)
        return user


def _starter_tasks(user_id: int, now: datetime) -> list[Task]:
    rows = [
        ("Complete project proposal", TaskPriority.HIGH, TaskStatus.PENDING, timedelta(days=2)),
        ("Review client feedback", TaskPriority.MEDIUM, TaskStatus.COMPLETED, timedelta(days=-1)),
        ("Schedule team meeting", TaskPriority.MEDIUM, TaskStatus.PENDING, timedelta(days=5)),
        ("Prepare presentation", TaskPriority.HIGH, TaskStatus.PENDING, timedelta(hours=12)),
    ]
    tasks = []
    for title, priority, status, offset in rows:
        completed = status is TaskStatus.COMPLETED
        tasks.append(
            Task(
                user_id=user_id,
                title=title,
                priority=priority.value,
                status=status.value,
                deadline=now + offset,
                completed=completed,
                completed_at=now if completed else None,
                created_at=now,
                updated_at=now,
            )
        )
    return tasks


def run_demo_seed(
    session_factory: SessionFactory,
    *,
    username: str = DEFAULT_USERNAME,
    force: bool = False,
    now: Optional[datetime] = None,
) -> SeedSummary:
    """Seed starter tasks and a habit for ``username``; a no-op when data exists."""

    now = now or datetime.now()
    user = ensure_user(session_factory, username)

    with session_factory() as session:
        existing = session.exec(select(Task.id).where(Task.user_id == user.id)).first()
        seeded = force or existing is None
        if seeded:
            session.add_all(_starter_tasks(user.id, now))
            session.add(
                Habit(
                    user_id=user.id,
                    title="Morning exercise",
                    description="Twenty minutes before breakfast",
                    frequency=HabitFrequency.DAILY.value,
                    duration=30,
                    start_date=now,
                    end_date=calculate_end_date(now, HabitFrequency.DAILY, 30),
                    status=HabitStatus.ACTIVE.value,
                    created_at=now,
                    updated_at=now,
                )
            )
            session.commit()

        task_count = session.exec(
            select(func.count()).select_from(Task).where(Task.user_id == user.id)
        ).one()
        habit_count = session.exec(
            select(func.count()).select_from(Habit).where(Habit.user_id == user.id)
        ).one()

    logger.info(
        "Demo seed finished",
        extra={"user_id": user.id, "seeded": seeded, "tasks": task_count, "habits": habit_count},
    )
    return SeedSummary(user_id=user.id, tasks=task_count, habits=habit_count, seeded=seeded)
