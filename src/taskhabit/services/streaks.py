"""Habit streak calculations."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Hashable, Iterable, Iterator, Protocol

__all__ = ["CompletionRecord", "HabitStreaks", "compute_habit_streaks", "habit_streak"]


class CompletionRecord(Protocol):
    """Anything shaped like a habit log row."""

    habit_id: Hashable
    date: date | datetime
    completed: bool


@dataclass(frozen=True, slots=True)
class HabitStreaks:
    """Longest run ever observed and longest run still live."""

    longest: int = 0
    current: int = 0


def _as_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _runs(days: Iterable[date]) -> Iterator[tuple[int, date]]:
    """Yield ``(length, newest_day)`` for each run of consecutive days."""

    ordered = sorted(set(days), reverse=True)
    streak = 0
    newest = None
    for index, day in enumerate(ordered):
        if streak == 0:
            newest = day
        streak += 1
        is_last = index == len(ordered) - 1
        if is_last or day - ordered[index + 1] > timedelta(days=1):
            yield streak, newest
            streak = 0


def compute_habit_streaks(
    logs: Iterable[CompletionRecord], *, today: date | None = None
) -> HabitStreaks:
    """Return the longest and current streaks across every habit in ``logs``.

    Logs are grouped per habit and walked newest first. A run ends when the
    next completed day is more than one calendar day older. A run counts as
    current when its newest day is today or yesterday. Several completions on
    the same calendar day count once.
    """

    today = today or date.today()
    yesterday = today - timedelta(days=1)

    days_by_habit: dict[Hashable, set[date]] = defaultdict(set)
    for log in logs:
        if not log.completed:
            continue
        days_by_habit[log.habit_id].add(_as_day(log.date))

    longest = 0
    current = 0
    for days in days_by_habit.values():
        for length, newest in _runs(days):
            longest = max(longest, length)
            if newest >= yesterday:
                current = max(current, length)

    return HabitStreaks(longest=longest, current=current)


def habit_streak(logs: Iterable[CompletionRecord], *, today: date | None = None) -> int:
    """Current streak for the logs of a single habit."""

    return compute_habit_streaks(logs, today=today).current
