"""Value objects returned by the insights service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from .habit import HabitLog


class IntensityLevel(str, Enum):
    """Heat-map bucket for a single day."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class TimePeriod(str, Enum):
    """Trailing window used for period statistics and week grids."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def days(self) -> int:
        """Length of the trailing statistics window."""
        return {TimePeriod.WEEK: 7, TimePeriod.MONTH: 30, TimePeriod.YEAR: 365}[self]

    @property
    def weeks(self) -> int:
        """Number of week rows shown for the period."""
        return {TimePeriod.WEEK: 1, TimePeriod.MONTH: 4, TimePeriod.YEAR: 52}[self]


@dataclass(slots=True)
class DayData:
    """One cell of a week or month grid."""

    day: date
    intensity: IntensityLevel
    is_today: bool
    log: Optional[HabitLog] = None
    is_current_month: bool = True


@dataclass(slots=True)
class WeekData:
    days: list[DayData] = field(default_factory=list)

    @property
    def start(self) -> date:
        return self.days[0].day


@dataclass(slots=True, frozen=True)
class PeriodStatistics:
    """Aggregates for a trailing week, month or year."""

    completed_days: int
    total_value: float
    completion_rate: float
    longest_streak: int
