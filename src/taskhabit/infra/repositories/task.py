"""SQLModel implementation of Task repository."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.task import Task


class SQLModelTaskRepository:
    """SQLModel-based task repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with self.session_factory() as session:
            obj = session.get(Task, task_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, status: Optional[str] = None) -> list[Task]:
        with self.session_factory() as session:
            statement = select(Task).where(Task.user_id == user_id)
            if status is not None:
                statement = statement.where(Task.status == status)
            statement = statement.order_by(Task.created_at.desc(), Task.id.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, task: Task) -> Task:
        with self.session_factory() as session:
            session.add(task)
            session.commit()
            session.refresh(task)
            session.expunge(task)
            return task

    def update(self, task: Task) -> Task:
        with self.session_factory() as session:
            merged = session.merge(task)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, task_id: int) -> None:
        with self.session_factory() as session:
            task = session.get(Task, task_id)
            if task:
                session.delete(task)
                session.commit()

    def with_deadline_between(
        self, *, user_id: int, start: datetime, end: datetime
    ) -> list[Task]:
        with self.session_factory() as session:
            statement = (
                select(Task)
                .where(Task.user_id == user_id)
                .where(Task.deadline >= start)  # type: ignore[operator]
                .where(Task.deadline <= end)  # type: ignore[operator]
                .order_by(Task.deadline)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def completed_between(
        self, *, user_id: int, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> list[Task]:
        with self.session_factory() as session:
            statement = (
                select(Task)
                .where(Task.user_id == user_id)
                .where(Task.completed == True)  # noqa: E712
                .where(Task.completed_at.is_not(None))  # type: ignore[union-attr]
            )
            if start is not None:
                statement = statement.where(Task.completed_at >= start)  # type: ignore[operator]
            if end is not None:
                statement = statement.where(Task.completed_at < end)  # type: ignore[operator]
            statement = statement.order_by(Task.completed_at)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def created_between(
        self, *, user_id: int, start: datetime, end: Optional[datetime] = None
    ) -> list[Task]:
        with self.session_factory() as session:
            statement = (
                select(Task)
                .where(Task.user_id == user_id)
                .where(Task.created_at >= start)
            )
            if end is not None:
                statement = statement.where(Task.created_at < end)
            statement = statement.order_by(Task.created_at)  # type: ignore[arg-type]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
