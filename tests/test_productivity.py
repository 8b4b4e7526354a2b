from __future__ import annotations

from types import SimpleNamespace

import pytest

from taskhabit.services import productivity


def _tasks(completed: int, pending: int) -> list[SimpleNamespace]:
    return [SimpleNamespace(completed=True)] * completed + [SimpleNamespace(completed=False)] * pending


@pytest.mark.parametrize(
    "part, whole, expected",
    [
        (0, 0, 0),
        (0, 4, 0),
        (4, 4, 100),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds half up
        (5, 8, 63),  # 62.5 rounds half up
        (1, 200, 1),  # 0.5 rounds half up
    ],
)
def test_percentage_rounds_half_up(part, whole, expected):
    assert productivity.percentage(part, whole) == expected


def test_productivity_score_of_empty_window_is_zero():
    assert productivity.productivity_score([]) == 0


def test_productivity_score_counts_completed_share():
    assert productivity.productivity_score(_tasks(3, 1)) == 75


def test_productivity_score_accepts_generators():
    assert productivity.productivity_score(task for task in _tasks(1, 1)) == 50


def test_compare_windows_reports_change():
    result = productivity.compare_windows(_tasks(3, 1), _tasks(1, 1))

    assert result.score == 75
    assert result.previous_score == 50
    assert result.change == 25


def test_compare_windows_with_empty_prior_window():
    result = productivity.compare_windows(_tasks(1, 2), [])

    assert result.previous_score == 0
    assert result.change == 33


def test_completion_delta():
    assert productivity.completion_delta(4, 7) == -3
