"""Tests for SQLModel repositories."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from taskhabit.infra.repositories import SQLModelHabitRepository, SQLModelTaskRepository
from taskhabit.infra.repositories import habit as habit_repo_module
from taskhabit.models import HabitLog

from tests.conftest import NOW


@pytest.fixture
def habits(session_factory):
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def tasks(session_factory):
    return SQLModelTaskRepository(session_factory)


class TestHabitLogToggle:
    def test_upsert_inserts_then_flips(self, habits, habit_factory):
        habit = habit_factory()

        first = habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW)
        second = habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW + timedelta(hours=2))
        third = habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW + timedelta(hours=3))

        assert first.completed is True
        assert second.completed is False
        assert third.completed is True
        assert first.id == second.id == third.id
        assert third.updated_at == NOW + timedelta(hours=3)
        assert third.date == NOW
        assert len(habits.logs_for_habit(habit.id)) == 1

    def test_fallback_without_upsert_support(self, habits, habit_factory, monkeypatch):
        monkeypatch.setattr(habit_repo_module, "_UPSERT_INSERTS", {})
        habit = habit_factory()

        first = habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW)
        second = habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW)

        assert first.completed is True
        assert second.completed is False
        assert len(habits.logs_for_habit(habit.id)) == 1

    def test_separate_days_get_separate_logs(self, habits, habit_factory):
        habit = habit_factory()

        habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW)
        habits.toggle_log(habit.id, user_id=habit.user_id, now=NOW + timedelta(days=1))

        logs = habits.logs_for_habit(habit.id)
        assert [log.day for log in logs] == [NOW.date(), (NOW + timedelta(days=1)).date()]

    def test_one_log_per_habit_and_day(self, db_session, habit_factory, log_factory):
        habit = habit_factory()
        log_factory(habit, NOW)

        db_session.add(
            HabitLog(
                habit_id=habit.id,
                user_id=habit.user_id,
                date=NOW + timedelta(hours=5),
                day=NOW.date(),
                completed=True,
                created_at=NOW,
                updated_at=NOW,
            )
        )
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()


class TestHabitLogQueries:
    def test_get_log(self, habits, habit_factory, log_factory):
        habit = habit_factory()
        log_factory(habit, NOW, completed=False)

        assert habits.get_log(habit.id, NOW.date()).completed is False
        assert habits.get_log(habit.id, (NOW - timedelta(days=1)).date()) is None

    def test_logs_for_habit_window(self, habits, habit_factory, log_factory):
        habit = habit_factory()
        for days_ago in (40, 10, 1):
            log_factory(habit, NOW - timedelta(days=days_ago))

        logs = habits.logs_for_habit(habit.id, since=NOW - timedelta(days=30), until=NOW)

        assert [log.date for log in logs] == [NOW - timedelta(days=10), NOW - timedelta(days=1)]

    def test_logs_for_user_spans_habits(self, habits, habit_factory, log_factory, other_user):
        reading = habit_factory(title="Read")
        running = habit_factory(title="Run")
        theirs = habit_factory(title="Theirs", owner=other_user)
        log_factory(reading, NOW - timedelta(days=1))
        log_factory(running, NOW, completed=False)
        log_factory(theirs, NOW)

        everything = habits.logs_for_user(user_id=reading.user_id)
        completed = habits.logs_for_user(user_id=reading.user_id, completed_only=True)

        assert [log.habit_id for log in everything] == [running.id, reading.id]
        assert [log.habit_id for log in completed] == [reading.id]


class TestTaskQueries:
    def test_completed_between_is_half_open(self, tasks, task_factory, user):
        start = datetime(2024, 3, 1)
        end = datetime(2024, 3, 8)
        inside = task_factory(title="Inside", completed_at=start)
        task_factory(title="At end", completed_at=end)
        task_factory(title="Pending")

        rows = tasks.completed_between(user_id=user.id, start=start, end=end)

        assert [task.id for task in rows] == [inside.id]

    def test_completed_between_without_bounds(self, tasks, task_factory, user):
        task_factory(completed_at=datetime(2020, 1, 1))
        task_factory(completed_at=datetime(2024, 3, 1))

        assert len(tasks.completed_between(user_id=user.id)) == 2

    def test_created_between(self, tasks, task_factory, user):
        task_factory(title="Old", created_at=NOW - timedelta(days=10))
        recent = task_factory(title="Recent", created_at=NOW - timedelta(days=2))

        rows = tasks.created_between(user_id=user.id, start=NOW - timedelta(days=7))

        assert [task.id for task in rows] == [recent.id]

    def test_update_and_delete(self, tasks, task_factory):
        task = task_factory()
        task.title = "Renamed"

        assert tasks.update(task).title == "Renamed"
        tasks.delete(task.id)
        assert tasks.get_by_id(task.id) is None

    def test_editing_a_factory_row_does_not_touch_the_arranging_session(
        self, tasks, task_factory, db_session
    ):
        task = task_factory()
        task.title = "Edited locally"

        tasks.delete(task.id)
        db_session.commit()

        assert inspect(task).detached
        assert tasks.get_by_id(task.id) is None
