"""Task management services."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional

from ..domain.repositories.task import TaskRepository
from ..errors import TaskNotFoundError
from ..events import TASK_CHANGED, EventBus
from ..logging_config import get_logger
from ..models.task import Task, TaskPriority, TaskStatus
from .dates import start_of_day
from .guards import UNCHANGED, owner_guarded

__all__ = ["TaskService", "task_to_dict"]

logger = get_logger(__name__)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "user_id": task.user_id,
        "title": task.title,
        "description": task.description,
        "priority": task.priority,
        "status": task.status,
        "deadline": task.deadline.isoformat() if task.deadline else None,
        "completed": task.completed,
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
        "created_at": task.created_at.isoformat(),
        "updated_at": task.updated_at.isoformat(),
    }


class TaskService:
    """CRUD for tasks that keeps ``completed`` and ``status`` in step."""

    def __init__(
        self,
        repository: TaskRepository,
        *,
        events: Optional[EventBus] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.repository = repository
        self.events = events or EventBus()
        self.clock = clock

    def list_tasks(self, user_id: int, *, status: TaskStatus | str | None = None) -> list[Task]:
        status_value = TaskStatus(status).value if status is not None else None
        return self.repository.list_all(user_id=user_id, status=status_value)

    @owner_guarded("task", TaskNotFoundError, foreign_as_missing=True)
    def get_task(self, task: Task, user_id: int) -> Task:
        return task

    def tasks_for_day(self, user_id: int, day: date | datetime) -> list[Task]:
        """Tasks due on the calendar day of ``day``, earliest deadline first."""

        start = start_of_day(day)
        end = start + timedelta(days=1) - timedelta(microseconds=1)
        return self.repository.with_deadline_between(user_id=user_id, start=start, end=end)

    def create_task(
        self,
        user_id: int,
        *,
        title: str,
        description: Optional[str] = None,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        deadline: Optional[datetime] = None,
    ) -> Task:
        now = self.clock()
        task = self.repository.create(
            Task(
                user_id=user_id,
                title=title,
                description=description,
                priority=TaskPriority(priority).value,
                status=TaskStatus.PENDING.value,
                deadline=deadline,
                completed=False,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Task created", extra={"task_id": task.id, "user_id": user_id})
        self._publish("created", task)
        return task

    @owner_guarded("task", TaskNotFoundError)
    def update_task(
        self,
        task: Task,
        user_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] | object = UNCHANGED,
        priority: TaskPriority | str | None = None,
        deadline: Optional[datetime] | object = UNCHANGED,
        status: TaskStatus | str | None = None,
    ) -> Task:
        """Apply the given changes; pass ``None`` to clear description or deadline."""

        if title is not None:
            task.title = title
        if description is not UNCHANGED:
            task.description = description
        if priority is not None:
            task.priority = TaskPriority(priority).value
        if deadline is not UNCHANGED:
            task.deadline = deadline
        now = self.clock()
        if status is not None:
            self._apply_status(task, TaskStatus(status), now=now)
        task.updated_at = now
        task = self.repository.update(task)
        self._publish("updated", task)
        return task

    @owner_guarded("task", TaskNotFoundError)
    def set_status(self, task: Task, user_id: int, status: TaskStatus | str) -> Task:
        now = self.clock()
        self._apply_status(task, TaskStatus(status), now=now)
        task.updated_at = now
        task = self.repository.update(task)
        self._publish("status", task)
        return task

    @owner_guarded("task", TaskNotFoundError)
    def toggle_completion(self, task: Task, user_id: int) -> Task:
        """Flip completion; an uncompleted task goes back to pending."""

        now = self.clock()
        target = TaskStatus.PENDING if task.completed else TaskStatus.COMPLETED
        self._apply_status(task, target, now=now)
        task.updated_at = now
        task = self.repository.update(task)
        logger.info(
            "Task completion toggled", extra={"task_id": task.id, "completed": task.completed}
        )
        self._publish("toggled", task)
        return task

    @owner_guarded("task", TaskNotFoundError)
    def delete_task(self, task: Task, user_id: int) -> None:
        self.repository.delete(task.id)
        logger.info("Task deleted", extra={"task_id": task.id, "user_id": user_id})
        self._publish("deleted", task)

    @staticmethod
    def _apply_status(task: Task, status: TaskStatus, *, now: datetime) -> None:
        was_completed = task.completed
        task.status = status.value
        task.completed = status is TaskStatus.COMPLETED
        if task.completed and not was_completed:
            task.completed_at = now
        elif not task.completed:
            task.completed_at = None

    def _publish(self, action: str, task: Task) -> None:
        self.events.publish(TASK_CHANGED, user_id=task.user_id, task_id=task.id, action=action)
