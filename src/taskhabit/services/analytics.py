"""Analytics views assembled from repository data."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any, Callable

from ..domain.repositories.habit import HabitRepository
from ..domain.repositories.task import TaskRepository
from ..logging_config import get_logger
from ..models.habit import Habit
from .dates import add_months, start_of_month, start_of_week
from .productivity import compare_windows, completion_delta
from .rankings import (
    DEFAULT_LIMIT,
    DayShare,
    HabitConsistency,
    MonthComparison,
    WeekdayCount,
    monthly_comparison,
    rank_habit_consistency,
    rank_productive_days,
    weekly_breakdown,
)
from .streaks import compute_habit_streaks

__all__ = ["AnalyticsService", "AnalyticsSummary"]

logger = get_logger(__name__)

SUMMARY_WINDOW = timedelta(days=7)


@dataclass(frozen=True, slots=True)
class AnalyticsSummary:
    tasks_completed: int
    tasks_completed_change: int
    longest_habit_streak: int
    current_habit_streak: int
    productivity_score: int
    productivity_score_change: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class AnalyticsService:
    """Fetch a user's records and run them through the pure calculators."""

    def __init__(
        self,
        task_repository: TaskRepository,
        habit_repository: HabitRepository,
        *,
        clock: Callable[[], datetime] = datetime.now,
        consistency_window_days: int = 30,
        ranking_limit: int = DEFAULT_LIMIT,
        comparison_months: int = 6,
    ) -> None:
        self.task_repository = task_repository
        self.habit_repository = habit_repository
        self.clock = clock
        self.consistency_window_days = consistency_window_days
        self.ranking_limit = ranking_limit
        self.comparison_months = comparison_months

    def summary(self, user_id: int) -> AnalyticsSummary:
        """Last seven days against the seven before them, plus habit streaks."""

        now = self.clock()
        window_start = now - SUMMARY_WINDOW
        previous_start = window_start - SUMMARY_WINDOW

        completed_now = self.task_repository.completed_between(
            user_id=user_id, start=window_start
        )
        completed_before = self.task_repository.completed_between(
            user_id=user_id, start=previous_start, end=window_start
        )
        productivity = compare_windows(
            self.task_repository.created_between(user_id=user_id, start=window_start),
            self.task_repository.created_between(
                user_id=user_id, start=previous_start, end=window_start
            ),
        )
        streaks = compute_habit_streaks(
            self.habit_repository.logs_for_user(user_id=user_id, completed_only=True),
            today=now.date(),
        )

        return AnalyticsSummary(
            tasks_completed=len(completed_now),
            tasks_completed_change=completion_delta(len(completed_now), len(completed_before)),
            longest_habit_streak=streaks.longest,
            current_habit_streak=streaks.current,
            productivity_score=productivity.score,
            productivity_score_change=productivity.change,
        )

    def weekly(self, user_id: int) -> list[WeekdayCount]:
        """Completions per weekday of the current Monday-first week."""

        now = self.clock()
        week_start = start_of_week(now)
        week_end = week_start + timedelta(days=7)
        tasks = self.task_repository.completed_between(
            user_id=user_id, start=week_start, end=week_end
        )
        logs = self.habit_repository.logs_for_user(
            user_id=user_id, since=week_start, until=week_end, completed_only=True
        )
        return weekly_breakdown(
            [task.completed_at for task in tasks],
            [log.date for log in logs],
            today=now,
        )

    def monthly(self, user_id: int) -> list[MonthComparison]:
        now = self.clock()
        earliest = add_months(start_of_month(now), -(self.comparison_months - 1) - 12)
        tasks = self.task_repository.completed_between(user_id=user_id, start=earliest)
        return monthly_comparison(
            [task.completed_at for task in tasks],
            today=now,
            months=self.comparison_months,
        )

    def productive_days(self, user_id: int) -> list[DayShare]:
        tasks = self.task_repository.completed_between(user_id=user_id)
        return rank_productive_days(
            [task.completed_at for task in tasks], limit=self.ranking_limit
        )

    def habit_consistency(self, user_id: int) -> list[HabitConsistency]:
        """Rank habits by completed share of their logs in the trailing window."""

        since = self.clock() - timedelta(days=self.consistency_window_days)

        def _load(habit: Habit):
            return self.habit_repository.logs_for_habit(habit.id, since=since)

        habits = self.habit_repository.list_all(user_id=user_id)
        ranking = rank_habit_consistency(habits, load_logs=_load, limit=self.ranking_limit)
        logger.debug(
            "Habit consistency ranked",
            extra={"user_id": user_id, "habits": len(habits), "ranked": len(ranking)},
        )
        return ranking
