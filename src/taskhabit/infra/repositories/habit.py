"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from sqlalchemy import not_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog

logger = get_logger(__name__)

# Dialects whose INSERT supports ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Habit]:
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at.desc(), Habit.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit) -> Habit:
        with self.session_factory() as session:
            merged = session.merge(habit)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, habit_id: int) -> None:
        """Delete a habit; its logs go with it through the relationship cascade."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit:
                session.delete(habit)
                session.commit()

    # Habit log operations
    def get_log(self, habit_id: int, day: date) -> Optional[HabitLog]:
        with self.session_factory() as session:
            obj = session.exec(
                select(HabitLog).where(HabitLog.habit_id == habit_id, HabitLog.day == day)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def logs_for_habit(
        self,
        habit_id: int,
        *,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> list[HabitLog]:
        with self.session_factory() as session:
            statement = select(HabitLog).where(HabitLog.habit_id == habit_id)
            if since is not None:
                statement = statement.where(HabitLog.date >= since)
            if until is not None:
                statement = statement.where(HabitLog.date < until)
            statement = statement.order_by(HabitLog.date)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def logs_for_user(
        self,
        *,
        user_id: int,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        completed_only: bool = False,
    ) -> list[HabitLog]:
        with self.session_factory() as session:
            statement = select(HabitLog).where(HabitLog.user_id == user_id)
            if since is not None:
                statement = statement.where(HabitLog.date >= since)
            if until is not None:
                statement = statement.where(HabitLog.date < until)
            if completed_only:
                statement = statement.where(HabitLog.completed == True)  # noqa: E712
            statement = statement.order_by(HabitLog.date.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def toggle_log(self, habit_id: int, *, user_id: int, now: datetime) -> HabitLog:
        """Insert today's log as completed, or flip ``completed`` when it exists.

        Relies on the (habit_id, day) unique constraint so concurrent toggles
        cannot produce two rows for the same day.
        """
        day = now.date()
        with self.session_factory() as session:
            insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert is not None:
                table = HabitLog.__table__  # type: ignore[attr-defined]
                statement = (
                    insert(table)
                    .values(
                        habit_id=habit_id,
                        user_id=user_id,
                        date=now,
                        day=day,
                        completed=True,
                        created_at=now,
                        updated_at=now,
                    )
                    .on_conflict_do_update(
                        index_elements=[table.c.habit_id, table.c.day],
                        set_={"completed": not_(table.c.completed), "updated_at": now},
                    )
                )
                session.exec(statement)  # type: ignore[call-overload]
                session.commit()
            else:
                self._toggle_log_fallback(session, habit_id, user_id=user_id, now=now)

            log = session.exec(
                select(HabitLog).where(HabitLog.habit_id == habit_id, HabitLog.day == day)
            ).one()
            session.refresh(log)
            session.expunge(log)
            return log

    @staticmethod
    def _toggle_log_fallback(
        session: Session, habit_id: int, *, user_id: int, now: datetime
    ) -> None:
        """Insert-then-flip for dialects without ON CONFLICT support."""
        day = now.date()
        session.add(
            HabitLog(
                habit_id=habit_id,
                user_id=user_id,
                date=now,
                day=day,
                completed=True,
                created_at=now,
                updated_at=now,
            )
        )
        try:
            session.commit()
            return
        except IntegrityError:
            session.rollback()
            logger.debug(
                "Habit log already exists; flipping", extra={"habit_id": habit_id, "day": day}
            )

        existing = session.exec(
            select(HabitLog)
            .where(HabitLog.habit_id == habit_id, HabitLog.day == day)
            .with_for_update()
        ).one()
        existing.completed = not existing.completed
        existing.updated_at = now
        session.add(existing)
        session.commit()
