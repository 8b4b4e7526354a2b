"""Tests for the analytics service against a real database."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from taskhabit.infra.repositories import SQLModelHabitRepository, SQLModelTaskRepository
from taskhabit.services.analytics import AnalyticsService
from taskhabit.services.rankings import DayShare

from tests.conftest import NOW


@pytest.fixture
def analytics(session_factory, clock):
    return AnalyticsService(
        SQLModelTaskRepository(session_factory),
        SQLModelHabitRepository(session_factory),
        clock=clock,
    )


def test_summary_for_new_user_is_all_zero(analytics, user):
    assert analytics.summary(user.id).to_dict() == {
        "tasks_completed": 0,
        "tasks_completed_change": 0,
        "longest_habit_streak": 0,
        "current_habit_streak": 0,
        "productivity_score": 0,
        "productivity_score_change": 0,
    }


def test_summary_compares_seven_day_windows(
    analytics, user, task_factory, habit_factory, log_factory
):
    # current window: 3 created, 2 completed
    task_factory(created_at=NOW - timedelta(days=1), completed_at=NOW - timedelta(hours=5))
    task_factory(created_at=NOW - timedelta(days=2), completed_at=NOW - timedelta(days=1))
    task_factory(created_at=NOW - timedelta(days=3))
    # previous window: 2 created, 2 completed
    task_factory(created_at=NOW - timedelta(days=9), completed_at=NOW - timedelta(days=8))
    task_factory(created_at=NOW - timedelta(days=10), completed_at=NOW - timedelta(days=10))
    # older than both windows
    task_factory(created_at=NOW - timedelta(days=30), completed_at=NOW - timedelta(days=30))

    habit = habit_factory(start_date=NOW - timedelta(days=20))
    for days_ago in (0, 1, 5, 6, 7, 8):
        log_factory(habit, NOW - timedelta(days=days_ago))

    summary = analytics.summary(user.id)

    assert summary.tasks_completed == 2
    assert summary.tasks_completed_change == 0
    assert summary.productivity_score == 67
    assert summary.productivity_score_change == -33
    assert summary.longest_habit_streak == 4
    assert summary.current_habit_streak == 2


def test_summary_ignores_other_users(analytics, user, other_user, task_factory):
    task_factory(owner=other_user, created_at=NOW, completed_at=NOW)

    assert analytics.summary(user.id).tasks_completed == 0


def test_weekly_counts_current_week(analytics, user, task_factory, habit_factory, log_factory):
    task_factory(completed_at=datetime(2024, 3, 11, 9))  # Monday
    task_factory(completed_at=datetime(2024, 3, 10, 9))  # previous Sunday
    habit = habit_factory(start_date=datetime(2024, 3, 1))
    log_factory(habit, datetime(2024, 3, 13, 7))
    log_factory(habit, datetime(2024, 3, 12, 7), completed=False)

    rows = analytics.weekly(user.id)

    assert rows[0].name == "Mon"
    assert [row.tasks for row in rows] == [1, 0, 0, 0, 0, 0, 0]
    assert [row.habits for row in rows] == [0, 0, 1, 0, 0, 0, 0]


def test_monthly_has_six_rows_ending_this_month(analytics, user, task_factory):
    task_factory(completed_at=datetime(2024, 3, 2))
    task_factory(completed_at=datetime(2023, 3, 2))

    rows = analytics.monthly(user.id)

    assert len(rows) == 6
    assert rows[-1].name == "Mar 2024"
    assert (rows[-1].current, rows[-1].previous) == (1, 1)


def test_productive_days_uses_completion_time(analytics, user, task_factory):
    # created on Monday, completed on Friday
    task_factory(created_at=datetime(2024, 3, 4), completed_at=datetime(2024, 3, 8, 17))

    result = analytics.productive_days(user.id)

    assert result[0] == DayShare("Friday", 100)


def test_productive_days_fallback(analytics, user):
    assert [share.day for share in analytics.productive_days(user.id)] == [
        "Monday",
        "Tuesday",
        "Wednesday",
    ]


def test_habit_consistency_uses_trailing_window(
    analytics, user, habit_factory, log_factory
):
    steady = habit_factory(title="Steady", start_date=NOW - timedelta(days=60))
    patchy = habit_factory(title="Patchy", start_date=NOW - timedelta(days=60))
    log_factory(steady, NOW - timedelta(days=1))
    log_factory(steady, NOW - timedelta(days=45), completed=False)  # outside the window
    log_factory(patchy, NOW - timedelta(days=1))
    log_factory(patchy, NOW - timedelta(days=2), completed=False)

    result = analytics.habit_consistency(user.id)

    assert [(item.title, item.percentage) for item in result] == [("Steady", 100), ("Patchy", 50)]
    assert result[0].habit_id == steady.id
