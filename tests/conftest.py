"""Pytest configuration and shared fixtures for TaskHabit tests.

Provides an isolated SQLite database per test, session factories in the shape
repositories expect, data factories, and a Flask test client.
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine, select

# Import all models to ensure they're registered with SQLModel metadata
from taskhabit.models import (
    Habit,
    HabitFrequency,
    HabitLog,
    HabitStatus,
    Task,
    TaskPriority,
    TaskStatus,
    User,
)
from taskhabit.services.dates import calculate_end_date

# Wednesday; most service tests run against this fixed clock.
NOW = datetime(2024, 3, 13, 10, 0)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for arranging test data directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Factory returning Session context managers, as repositories expect."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def clock():
    """A settable clock; call ``clock.set(dt)`` to move time."""

    class _Clock:
        def __init__(self) -> None:
            self.now = NOW

        def __call__(self) -> datetime:
            return self.now

        def set(self, value: datetime) -> None:
            self.now = value

        def advance(self, **kwargs) -> None:
            self.now = self.now + timedelta(**kwargs)

    return _Clock()


# =============================================================================
# Test Data Factories
# =============================================================================


def _get_or_create_user(session: Session, username: str) -> User:
    existing = session.exec(select(User).where(User.username == username)).first()
    if existing:
        return existing
    user_row = User(username=username)
    session.add(user_row)
    session.commit()
    session.refresh(user_row)
    return user_row


@pytest.fixture
def user(db_session) -> User:
    """Default owner for test data."""
    return _get_or_create_user(db_session, "tester")


@pytest.fixture
def other_user(db_session) -> User:
    """A second user for ownership checks."""
    return _get_or_create_user(db_session, "intruder")


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for persisted habits."""

    def _create_habit(
        title: str = "Exercise",
        frequency: HabitFrequency = HabitFrequency.DAILY,
        duration: int = 30,
        start_date: datetime | None = None,
        status: HabitStatus = HabitStatus.ACTIVE,
        created_at: datetime | None = None,
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        start = start_date or NOW
        habit = Habit(
            user_id=owner.id,
            title=title,
            frequency=frequency.value,
            duration=duration,
            start_date=start,
            end_date=calculate_end_date(start, frequency, duration),
            status=status.value,
            created_at=created_at or NOW,
            updated_at=created_at or NOW,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        db_session.expunge(habit)
        return habit

    return _create_habit


@pytest.fixture
def log_factory(db_session):
    """Factory for persisted habit logs."""

    def _create_log(habit: Habit, when: datetime, completed: bool = True) -> HabitLog:
        log = HabitLog(
            habit_id=habit.id,
            user_id=habit.user_id,
            date=when,
            day=when.date(),
            completed=completed,
            created_at=when,
            updated_at=when,
        )
        db_session.add(log)
        db_session.commit()
        db_session.refresh(log)
        db_session.expunge(log)
        return log

    return _create_log


@pytest.fixture
def task_factory(db_session, user):
    """Factory for persisted tasks; ``completed_at`` marks the task completed."""

    def _create_task(
        title: str = "Write report",
        priority: TaskPriority = TaskPriority.MEDIUM,
        deadline: datetime | None = None,
        created_at: datetime | None = None,
        completed_at: datetime | None = None,
        owner: User | None = None,
    ) -> Task:
        owner = owner or user
        completed = completed_at is not None
        task = Task(
            user_id=owner.id,
            title=title,
            priority=priority.value,
            status=(TaskStatus.COMPLETED if completed else TaskStatus.PENDING).value,
            deadline=deadline,
            completed=completed,
            completed_at=completed_at,
            created_at=created_at or NOW,
            updated_at=completed_at or created_at or NOW,
        )
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        db_session.expunge(task)
        return task

    return _create_task


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask app backed by a throwaway SQLite file."""
    monkeypatch.setenv("TASKHABIT_DATA_DIR", str(tmp_path))

    from taskhabit import create_app
    from taskhabit.config import TestConfig

    config = TestConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'test.db'}"
    app = create_app(config=config)
    app.config.update(TESTING=True, SECRET_KEY="test-secret")
    yield app
    app.extensions["taskhabit"].engine.dispose()


@pytest.fixture
def app_user(app):
    """A user created through the app's own session factory."""
    from taskhabit.services.seed import ensure_user

    return ensure_user(app.extensions["taskhabit"].session_factory, "tester")


@pytest.fixture
def client(app, app_user):
    """Test client signed in as ``app_user``."""
    with app.test_client() as client:
        with client.session_transaction() as session:
            session["user_id"] = app_user.id
        yield client
