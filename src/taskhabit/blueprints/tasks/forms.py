"""Task request payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.task import TaskPriority, TaskStatus


class TaskForm(BaseModel):
    """Payload for creating a task."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(max_length=200, description="Short label for the task")
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    deadline: Optional[datetime] = Field(default=None)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a task title.")
        return value


class TaskUpdateForm(BaseModel):
    """Partial update; omitted fields stay as they are."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[TaskPriority] = None
    deadline: Optional[datetime] = None
    status: Optional[TaskStatus] = None


class TaskStatusForm(BaseModel):
    status: TaskStatus


__all__ = ["TaskForm", "TaskStatusForm", "TaskUpdateForm"]
