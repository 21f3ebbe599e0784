"""Pure habit helpers: completion, intensity and streaks."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..dates import HabitCalendar
from ..models.habit import Habit, HabitLog
from ..models.views import IntensityLevel

DEFAULT_STREAK_LOOKBACK_DAYS = 365


def is_completed(habit: Habit, value: float) -> bool:
    """Return whether ``value`` completes the habit's day."""

    if habit.frequency_type.is_weekly:
        return value > 0
    return value >= habit.target_value


def calculate_intensity(habit: Habit, log: Optional[HabitLog]) -> IntensityLevel:
    """Bucket a day's progress for heat-map colouring."""

    if log is None:
        return IntensityLevel.NONE

    # Weekly cadences are binary: any completed day is fully coloured.
    if habit.frequency_type.is_weekly:
        return IntensityLevel.VERY_HIGH if log.completed else IntensityLevel.NONE

    if log.value <= 0:
        return IntensityLevel.NONE
    ratio = log.value / habit.target_value
    if ratio >= 1.5:
        return IntensityLevel.VERY_HIGH
    if ratio >= 1.0:
        return IntensityLevel.HIGH
    if ratio >= 0.5:
        return IntensityLevel.MEDIUM
    return IntensityLevel.LOW


def current_streak(
    logs: Iterable[HabitLog],
    *,
    today: date,
    lookback_days: int = DEFAULT_STREAK_LOOKBACK_DAYS,
) -> int:
    """Consecutive completed days ending today, capped at ``lookback_days``."""

    completed_days = {log.occurred_on for log in logs if log.completed}

    streak = 0
    cursor = today
    for _ in range(lookback_days):
        if cursor not in completed_days:
            break
        streak += 1
        cursor = HabitCalendar.add_days(cursor, -1)
    return streak


def longest_streak(logs: Iterable[HabitLog], *, since: Optional[date] = None) -> int:
    """Longest run of consecutive completed days, optionally from ``since`` on.

    Adjacent entries one day apart extend the run; anything else, a repeated
    day included, starts a new run.
    """

    days = sorted(
        log.occurred_on
        for log in logs
        if log.completed and (since is None or log.occurred_on >= since)
    )
    if not days:
        return 0

    longest = 1
    run = 1
    for previous, current in zip(days, days[1:]):
        if HabitCalendar.days_between(previous, current) == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


__all__ = [
    "DEFAULT_STREAK_LOOKBACK_DAYS",
    "calculate_intensity",
    "current_streak",
    "is_completed",
    "longest_streak",
]
