"""Weekday and habit rankings plus chart bucketing for the analytics views."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional, Protocol, Sequence

from ..logging_config import get_logger
from .dates import (
    WEEKDAY_NAMES,
    add_months,
    each_day,
    end_of_week,
    start_of_day,
    start_of_month,
    start_of_week,
    weekday_index,
)
from .productivity import percentage

__all__ = [
    "DEFAULT_LIMIT",
    "DayShare",
    "HabitConsistency",
    "MonthComparison",
    "WeekdayCount",
    "monthly_comparison",
    "rank_habit_consistency",
    "rank_productive_days",
    "weekly_breakdown",
]

DEFAULT_LIMIT = 3

logger = get_logger(__name__)


class LogFlag(Protocol):
    completed: bool


@dataclass(frozen=True, slots=True)
class DayShare:
    day: str
    percentage: int


@dataclass(frozen=True, slots=True)
class HabitConsistency:
    title: str
    percentage: int
    habit_id: Optional[int] = None


@dataclass(frozen=True, slots=True)
class WeekdayCount:
    name: str
    tasks: int
    habits: int


@dataclass(frozen=True, slots=True)
class MonthComparison:
    name: str
    current: int
    previous: int


def rank_productive_days(
    completed_at: Iterable[date | datetime], *, limit: int = DEFAULT_LIMIT
) -> list[DayShare]:
    """Return the weekdays with the largest share of completions.

    Ties keep Monday-to-Sunday order. With no completions at all the first
    ``limit`` weekdays are returned at 0%.
    """

    counts = [0] * 7
    for instant in completed_at:
        counts[weekday_index(instant)] += 1

    total = sum(counts)
    if total == 0:
        return [DayShare(day=name, percentage=0) for name in WEEKDAY_NAMES[:limit]]

    shares = [
        DayShare(day=name, percentage=percentage(count, total))
        for name, count in zip(WEEKDAY_NAMES, counts)
    ]
    # sorted() is stable, so equal percentages stay in weekday order
    return sorted(shares, key=lambda share: share.percentage, reverse=True)[:limit]


def rank_habit_consistency(
    habits: Iterable[Any],
    *,
    load_logs: Callable[[Any], Iterable[LogFlag]] | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[HabitConsistency]:
    """Rank habits by the share of their logs that are completed.

    Each habit needs a ``title``; its logs come from ``load_logs(habit)`` or,
    without a loader, from ``habit.logs``. Callers restrict the logs to the
    window they care about. A habit whose logs cannot be loaded is skipped.
    """

    results: list[HabitConsistency] = []
    for habit in habits:
        try:
            logs: Sequence[LogFlag] = list(
                load_logs(habit) if load_logs is not None else habit.logs
            )
        except Exception:
            logger.warning(
                "Skipping habit in consistency ranking; logs unavailable",
                exc_info=True,
                extra={"habit_id": getattr(habit, "id", None), "title": habit.title},
            )
            continue

        completed = sum(1 for log in logs if log.completed)
        results.append(
            HabitConsistency(
                title=habit.title,
                percentage=percentage(completed, len(logs)),
                habit_id=getattr(habit, "id", None),
            )
        )

    return sorted(results, key=lambda item: item.percentage, reverse=True)[:limit]


def weekly_breakdown(
    task_completions: Iterable[date | datetime],
    habit_completions: Iterable[date | datetime],
    *,
    today: date | datetime,
) -> list[WeekdayCount]:
    """Count task and habit completions per day of the week containing ``today``."""

    week_start = start_of_week(today)
    week_end = end_of_week(today)

    def _bucket(instants: Iterable[date | datetime]) -> list[int]:
        counts = [0] * 7
        for instant in instants:
            moment = instant if isinstance(instant, datetime) else start_of_day(instant)
            if week_start <= moment <= week_end:
                counts[weekday_index(moment)] += 1
        return counts

    tasks = _bucket(task_completions)
    habits = _bucket(habit_completions)
    return [
        WeekdayCount(name=day.strftime("%a"), tasks=tasks[index], habits=habits[index])
        for index, day in enumerate(each_day(week_start, week_end))
    ]


def monthly_comparison(
    completed_at: Iterable[date | datetime],
    *,
    today: date | datetime,
    months: int = 6,
) -> list[MonthComparison]:
    """Completions per month for the last ``months`` months, oldest first.

    ``previous`` is the count for the same month one year earlier.
    """

    per_month = Counter((instant.year, instant.month) for instant in completed_at)

    rows: list[MonthComparison] = []
    for offset in range(months - 1, -1, -1):
        month_start = start_of_month(add_months(start_of_month(today), -offset))
        year_before = add_months(month_start, -12)
        rows.append(
            MonthComparison(
                name=month_start.strftime("%b %Y"),
                current=per_month[(month_start.year, month_start.month)],
                previous=per_month[(year_before.year, year_before.month)],
            )
        )
    return rows
