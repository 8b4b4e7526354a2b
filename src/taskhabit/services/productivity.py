"""Productivity scoring for task windows."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol

__all__ = [
    "CompletionFlag",
    "ProductivityComparison",
    "compare_windows",
    "completion_delta",
    "percentage",
    "productivity_score",
]


class CompletionFlag(Protocol):
    completed: bool


@dataclass(frozen=True, slots=True)
class ProductivityComparison:
    """Score of the current window against the window before it."""

    score: int
    previous_score: int

    @property
    def change(self) -> int:
        return self.score - self.previous_score


def percentage(part: int, whole: int) -> int:
    """Return ``part / whole`` as a whole percentage, rounding halves up.

    An empty ``whole`` yields 0 so deltas stay defined.
    """

    if whole <= 0:
        return 0
    ratio = Decimal(100 * part) / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def productivity_score(tasks: Iterable[CompletionFlag]) -> int:
    """Percentage of ``tasks`` that are completed."""

    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return percentage(completed, total)


def compare_windows(
    current: Iterable[CompletionFlag], prior: Iterable[CompletionFlag]
) -> ProductivityComparison:
    return ProductivityComparison(
        score=productivity_score(current),
        previous_score=productivity_score(prior),
    )


def completion_delta(current_count: int, prior_count: int) -> int:
    """Window-over-window change in completed task counts."""

    return current_count - prior_count
