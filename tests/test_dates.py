"""Tests for calendar bucketing helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from taskhabit.models.habit import HabitFrequency
from taskhabit.services import dates


def test_weekday_index_is_monday_first():
    monday = datetime(2024, 3, 11, 9, 30)
    assert dates.weekday_index(monday) == 0
    assert dates.weekday_index(monday + timedelta(days=6)) == 6
    assert dates.weekday_index(date(2024, 3, 17)) == 6  # Sunday


def test_week_boundaries_for_midweek_instant():
    wednesday = datetime(2024, 3, 13, 18, 45)

    assert dates.start_of_week(wednesday) == datetime(2024, 3, 11)
    assert dates.end_of_week(wednesday) == datetime(2024, 3, 17, 23, 59, 59, 999999)


def test_week_boundaries_on_sunday_stay_in_same_week():
    sunday = datetime(2024, 3, 17, 23, 0)
    assert dates.start_of_week(sunday) == datetime(2024, 3, 11)


def test_month_boundaries():
    leap_feb = datetime(2024, 2, 10, 12, 0)

    assert dates.start_of_month(leap_feb) == datetime(2024, 2, 1)
    assert dates.end_of_month(leap_feb) == datetime(2024, 2, 29, 23, 59, 59, 999999)
    assert dates.end_of_month(date(2023, 12, 5)) == datetime(2023, 12, 31, 23, 59, 59, 999999)


def test_each_day_is_inclusive():
    days = dates.each_day(datetime(2024, 3, 11, 15, 0), datetime(2024, 3, 13, 1, 0))
    assert days == [datetime(2024, 3, 11), datetime(2024, 3, 12), datetime(2024, 3, 13)]


def test_each_day_empty_when_end_before_start():
    assert dates.each_day(date(2024, 3, 13), date(2024, 3, 12)) == []


@pytest.mark.parametrize(
    "start, months, expected",
    [
        (datetime(2024, 1, 15, 8, 0), 1, datetime(2024, 2, 15, 8, 0)),
        (datetime(2024, 1, 31), 1, datetime(2024, 2, 29)),
        (datetime(2023, 1, 31), 1, datetime(2023, 2, 28)),
        (datetime(2024, 11, 30), 3, datetime(2025, 2, 28)),
        (datetime(2024, 3, 31), -1, datetime(2024, 2, 29)),
        (datetime(2024, 3, 15), -12, datetime(2023, 3, 15)),
    ],
)
def test_add_months_clamps_to_month_end(start, months, expected):
    assert dates.add_months(start, months) == expected


def test_calculate_end_date_daily_and_weekly():
    start = datetime(2024, 3, 13, 10, 0)

    assert dates.calculate_end_date(start, HabitFrequency.DAILY, 10) == datetime(2024, 3, 23, 10, 0)
    assert dates.calculate_end_date(start, "weekly", 2) == datetime(2024, 3, 27, 10, 0)


def test_calculate_end_date_monthly_from_month_end():
    start = datetime(2024, 1, 31)
    assert dates.calculate_end_date(start, HabitFrequency.MONTHLY, 1) == datetime(2024, 2, 29)


def test_calculate_end_date_rejects_unknown_frequency():
    with pytest.raises(ValueError):
        dates.calculate_end_date(datetime(2024, 1, 1), "yearly", 1)


def test_duration_and_frequency_labels():
    assert dates.format_duration(HabitFrequency.DAILY, 1) == "1 day"
    assert dates.format_duration("weekly", 3) == "3 weeks"
    assert dates.format_duration(HabitFrequency.MONTHLY, 12) == "12 months"
    assert dates.frequency_label("monthly") == "Monthly"
