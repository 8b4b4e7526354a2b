"""Habit lifecycle management."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..domain.repositories.habit import HabitRepository
from ..errors import HabitNotFoundError, InvalidTransitionError
from ..events import HABIT_CHANGED, EventBus
from ..logging_config import get_logger
from ..models.habit import Habit, HabitFrequency, HabitLog, HabitStatus
from .dates import calculate_end_date, format_duration, frequency_label
from .guards import UNCHANGED, owner_guarded
from .streaks import habit_streak

__all__ = ["HabitService", "HabitView"]

logger = get_logger(__name__)

# Manual transitions; ACTIVE -> COMPLETED only happens through toggle_completion.
_ALLOWED_TRANSITIONS = {
    (HabitStatus.ACTIVE, HabitStatus.PAUSED),
    (HabitStatus.PAUSED, HabitStatus.ACTIVE),
}


@dataclass(frozen=True, slots=True)
class HabitView:
    """Habit plus the values derived from its logs at read time."""

    habit: Habit
    streak: int
    completed_today: bool

    def to_dict(self) -> dict[str, Any]:
        habit = self.habit
        return {
            "id": habit.id,
            "user_id": habit.user_id,
            "title": habit.title,
            "description": habit.description,
            "frequency": habit.frequency,
            "frequency_label": frequency_label(habit.frequency),
            "duration": habit.duration,
            "duration_label": format_duration(habit.frequency, habit.duration),
            "start_date": habit.start_date.isoformat(),
            "end_date": habit.end_date.isoformat(),
            "status": habit.status,
            "created_at": habit.created_at.isoformat(),
            "updated_at": habit.updated_at.isoformat(),
            "streak": self.streak,
            "target": habit.duration,
            "completed_today": self.completed_today,
        }


class HabitService:
    """Create, edit and track habits for their owners."""

    def __init__(
        self,
        repository: HabitRepository,
        *,
        events: Optional[EventBus] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.repository = repository
        self.events = events or EventBus()
        self.clock = clock

    # Reads ----------------------------------------------------------------

    def list_habits(self, user_id: int) -> list[HabitView]:
        """Return the user's habits, newest first, with derived fields."""

        today = self.clock().date()
        return [self._view(habit, today=today) for habit in self.repository.list_all(user_id=user_id)]

    @owner_guarded("habit", HabitNotFoundError, foreign_as_missing=True)
    def get_habit(self, habit: Habit, user_id: int) -> HabitView:
        return self._view(habit, today=self.clock().date())

    @owner_guarded("habit", HabitNotFoundError, foreign_as_missing=True)
    def habit_logs(self, habit: Habit, user_id: int) -> list[HabitLog]:
        return self.repository.logs_for_habit(habit.id)

    def _view(self, habit: Habit, *, today: date) -> HabitView:
        logs = self.repository.logs_for_habit(habit.id)
        completed_today = any(log.completed and log.day == today for log in logs)
        return HabitView(
            habit=habit,
            streak=habit_streak(logs, today=today),
            completed_today=completed_today,
        )

    # Writes ---------------------------------------------------------------

    def create_habit(
        self,
        user_id: int,
        *,
        title: str,
        frequency: HabitFrequency | str,
        duration: int,
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
    ) -> Habit:
        """Create an active habit whose end date follows from its frequency and duration."""

        if duration < 1:
            raise ValueError("Habit duration must be at least 1.")
        frequency = HabitFrequency(frequency)
        now = self.clock()
        start = start_date or now
        habit = self.repository.create(
            Habit(
                user_id=user_id,
                title=title,
                description=description,
                frequency=frequency.value,
                duration=duration,
                start_date=start,
                end_date=calculate_end_date(start, frequency, duration),
                status=HabitStatus.ACTIVE.value,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Habit created", extra={"habit_id": habit.id, "user_id": user_id})
        self._publish("created", habit)
        return habit

    @owner_guarded("habit", HabitNotFoundError)
    def update_habit(
        self,
        habit: Habit,
        user_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] | object = UNCHANGED,
        frequency: HabitFrequency | str | None = None,
        duration: Optional[int] = None,
    ) -> Habit:
        """Edit a habit; the end date is recomputed when frequency or duration change.

        The start date never changes after creation. Passing ``None`` as
        ``description`` clears it.
        """

        if title is not None:
            habit.title = title
        if description is not UNCHANGED:
            habit.description = description
        if frequency is not None or duration is not None:
            if duration is not None and duration < 1:
                raise ValueError("Habit duration must be at least 1.")
            habit.frequency = HabitFrequency(frequency or habit.frequency).value
            habit.duration = duration if duration is not None else habit.duration
            habit.end_date = calculate_end_date(habit.start_date, habit.frequency, habit.duration)
        habit.updated_at = self.clock()
        habit = self.repository.update(habit)
        self._publish("updated", habit)
        return habit

    @owner_guarded("habit", HabitNotFoundError)
    def pause_habit(self, habit: Habit, user_id: int) -> Habit:
        return self._transition(habit, HabitStatus.PAUSED)

    @owner_guarded("habit", HabitNotFoundError)
    def resume_habit(self, habit: Habit, user_id: int) -> Habit:
        return self._transition(habit, HabitStatus.ACTIVE)

    @owner_guarded("habit", HabitNotFoundError)
    def set_status(self, habit: Habit, user_id: int, status: HabitStatus | str) -> Habit:
        """Write ``status`` directly; the only way a habit becomes FAILED today."""

        return self._apply_status(habit, HabitStatus(status))

    @owner_guarded("habit", HabitNotFoundError)
    def delete_habit(self, habit: Habit, user_id: int) -> None:
        self.repository.delete(habit.id)
        logger.info("Habit deleted", extra={"habit_id": habit.id, "user_id": user_id})
        self._publish("deleted", habit)

    @owner_guarded("habit", HabitNotFoundError)
    def toggle_completion(
        self, habit: Habit, user_id: int, *, now: Optional[datetime] = None
    ) -> HabitLog:
        """Mark today done, or undo it when today's log is already there.

        Logging a completion on or after the end date completes the habit;
        undoing one never does.
        """

        if HabitStatus(habit.status) is not HabitStatus.ACTIVE:
            raise InvalidTransitionError(
                habit.status,
                HabitStatus.ACTIVE.value,
                message=f"Only active habits accept completions (habit is {habit.status}).",
            )

        now = now or self.clock()
        log = self.repository.toggle_log(habit.id, user_id=user_id, now=now)
        logger.info(
            "Habit completion toggled",
            extra={"habit_id": habit.id, "day": log.day, "completed": log.completed},
        )

        if log.completed and now >= habit.end_date:
            self._apply_status(habit, HabitStatus.COMPLETED)
        else:
            self._publish("logged", habit)
        return log

    # Internals ------------------------------------------------------------

    def _transition(self, habit: Habit, target: HabitStatus) -> Habit:
        current = HabitStatus(habit.status)
        if (current, target) not in _ALLOWED_TRANSITIONS:
            raise InvalidTransitionError(current.value, target.value)
        return self._apply_status(habit, target)

    def _apply_status(self, habit: Habit, status: HabitStatus) -> Habit:
        previous = habit.status
        habit.status = status.value
        habit.updated_at = self.clock()
        habit = self.repository.update(habit)
        logger.info(
            "Habit status changed",
            extra={"habit_id": habit.id, "from": previous, "to": status.value},
        )
        self._publish("status", habit)
        return habit

    def _publish(self, action: str, habit: Habit) -> None:
        self.events.publish(
            HABIT_CHANGED, user_id=habit.user_id, habit_id=habit.id, action=action
        )
