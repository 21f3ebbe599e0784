"""Habit tracking data structures."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class FrequencyType(str, Enum):
    """Cadence a habit's target is measured against."""

    DAILY = "daily"
    TIMES_PER_WEEK = "times_per_week"
    HOURS_PER_WEEK = "hours_per_week"

    @property
    def label(self) -> str:
        return _FREQUENCY_LABELS[self]

    @property
    def unit(self) -> str:
        return _FREQUENCY_UNITS[self]

    @property
    def is_weekly(self) -> bool:
        """Weekly cadences count any positive progress as a completed day."""
        return self is not FrequencyType.DAILY


_FREQUENCY_LABELS = {
    FrequencyType.DAILY: "Daily Goal",
    FrequencyType.TIMES_PER_WEEK: "Times per Week",
    FrequencyType.HOURS_PER_WEEK: "Hours per Week",
}

_FREQUENCY_UNITS = {
    FrequencyType.DAILY: "per day",
    FrequencyType.TIMES_PER_WEEK: "times/week",
    FrequencyType.HOURS_PER_WEEK: "hours/week",
}


def format_value(value: float) -> str:
    """Render a progress or target value: whole numbers without decimals."""

    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


class Habit(SQLModel, table=True):
    """A user-defined habit with a target cadence."""

    __tablename__: ClassVar[str] = "habit"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    frequency_type: FrequencyType = Field(default=FrequencyType.DAILY, nullable=False)
    target_value: float = Field(default=1.0, nullable=False)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False)

    @property
    def subtitle(self) -> str:
        return f"{self.frequency_type.label}: {format_value(self.target_value)}"


class HabitLog(SQLModel, table=True):
    """Progress recorded for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_log"
    __table_args__ = (UniqueConstraint("habit_id", "occurred_on", name="uq_habit_log_day"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    # Plain value reference; deleting a habit removes its logs in the tracker.
    habit_id: uuid.UUID = Field(nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    value: float = Field(default=0.0, nullable=False)
    completed: bool = Field(default=False, nullable=False)
    note: Optional[str] = Field(default=None, max_length=1000)
    photo_data: Optional[bytes] = Field(default=None)
