"""Habit request payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models.habit import HabitFrequency


class HabitForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(max_length=120, description="Short label for the habit")
    description: Optional[str] = Field(default=None, max_length=1000)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY)
    duration: int = Field(ge=1, le=3650, description="Number of frequency units to track")
    start_date: Optional[datetime] = Field(default=None)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Ensure the habit title is present."""

        if not value:
            raise ValueError("Please provide a habit title.")
        return value


class HabitUpdateForm(BaseModel):
    """Partial update; the start date cannot be edited."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = Field(default=None, max_length=1000)
    frequency: Optional[HabitFrequency] = None
    duration: Optional[int] = Field(default=None, ge=1, le=3650)


__all__ = ["HabitForm", "HabitUpdateForm"]
