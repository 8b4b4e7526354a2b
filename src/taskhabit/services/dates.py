"""Calendar bucketing helpers shared by the analytics services.

Weeks start on Monday. All helpers work on naive local datetimes; ``date``
inputs are accepted wherever a day boundary is computed.
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import TypeVar

from ..models.habit import HabitFrequency

__all__ = [
    "WEEKDAY_NAMES",
    "add_months",
    "calculate_end_date",
    "each_day",
    "end_of_month",
    "end_of_week",
    "format_duration",
    "frequency_label",
    "start_of_day",
    "start_of_month",
    "start_of_week",
    "weekday_index",
]

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_ONE_TICK = timedelta(microseconds=1)

DateLike = TypeVar("DateLike", date, datetime)


def start_of_day(value: date | datetime) -> datetime:
    """Return midnight of the calendar day containing ``value``."""

    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(value, time.min)


def weekday_index(value: date | datetime) -> int:
    """Return 0 for Monday through 6 for Sunday."""

    return value.weekday()


def start_of_week(value: date | datetime) -> datetime:
    day_start = start_of_day(value)
    return day_start - timedelta(days=weekday_index(day_start))


def end_of_week(value: date | datetime) -> datetime:
    """Return the last instant of Sunday in the week containing ``value``."""

    return start_of_week(value) + timedelta(days=7) - _ONE_TICK


def start_of_month(value: date | datetime) -> datetime:
    return start_of_day(value).replace(day=1)


def end_of_month(value: date | datetime) -> datetime:
    return add_months(start_of_month(value), 1) - _ONE_TICK


def each_day(start: date | datetime, end: date | datetime) -> list[datetime]:
    """Return the start of every day from ``start`` to ``end`` inclusive."""

    cursor = start_of_day(start)
    last = start_of_day(end)
    days: list[datetime] = []
    while cursor <= last:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days


def add_months(value: DateLike, months: int) -> DateLike:
    """Shift ``value`` by whole calendar months.

    The day of month is kept when it exists in the target month and clamped
    to the month's last day otherwise (Jan 31 + 1 month -> Feb 28/29).
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def calculate_end_date(
    start: datetime, frequency: HabitFrequency | str, duration: int
) -> datetime:
    """Return ``start`` advanced by ``duration`` units of ``frequency``."""

    frequency = HabitFrequency(frequency)
    if frequency is HabitFrequency.DAILY:
        return start + timedelta(days=duration)
    if frequency is HabitFrequency.WEEKLY:
        return start + timedelta(days=duration * 7)
    return add_months(start, duration)


_UNIT_NAMES = {
    HabitFrequency.DAILY: ("day", "days"),
    HabitFrequency.WEEKLY: ("week", "weeks"),
    HabitFrequency.MONTHLY: ("month", "months"),
}


def format_duration(frequency: HabitFrequency | str, duration: int) -> str:
    singular, plural = _UNIT_NAMES[HabitFrequency(frequency)]
    return f"{duration} {singular if duration == 1 else plural}"


def frequency_label(frequency: HabitFrequency | str) -> str:
    return HabitFrequency(frequency).value.capitalize()
