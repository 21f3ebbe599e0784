"""Calendar arithmetic shared by the tracker and insights services.

Every "start of day", "days between" and "start of week" decision goes through
:class:`HabitCalendar` so the week-start policy and the notion of *now* can be
swapped in one place (tests pass a fixed clock).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Union

DateLike = Union[date, datetime]

SUNDAY = calendar.SUNDAY


class HabitCalendar:
    """Local-calendar helper bound to a clock and a first weekday."""

    def __init__(
        self,
        *,
        first_weekday: int = SUNDAY,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0-6, got {first_weekday}")
        self.first_weekday = first_weekday
        self._clock = clock or datetime.now
        self._calendar = calendar.Calendar(firstweekday=first_weekday)

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.start_of_day(self.now())

    @staticmethod
    def start_of_day(value: DateLike) -> date:
        """Normalize a timestamp to its calendar day."""

        if isinstance(value, datetime):
            return value.date()
        return value

    @staticmethod
    def days_between(start: DateLike, end: DateLike) -> int:
        """Whole calendar days from ``start`` to ``end`` (negative if reversed)."""

        return (HabitCalendar.start_of_day(end) - HabitCalendar.start_of_day(start)).days

    def elapsed_days(self, since: datetime) -> int:
        """Complete 24-hour periods between ``since`` and now."""

        elapsed = self.now() - since
        if elapsed.total_seconds() < 0:
            return -((-elapsed).days)
        return elapsed.days

    @staticmethod
    def add_days(day: date, days: int) -> date:
        return day + timedelta(days=days)

    def week_start(self, value: DateLike) -> date:
        """First day of the week containing ``value``."""

        day = self.start_of_day(value)
        return day - timedelta(days=(day.weekday() - self.first_weekday) % 7)

    def week_days(self, start: date) -> list[date]:
        return [start + timedelta(days=offset) for offset in range(7)]

    def month_weeks(self, year: int, month: int) -> list[list[date]]:
        """Week rows covering a whole month, padded with neighbouring days."""

        return self._calendar.monthdatescalendar(year, month)

    def is_today(self, day: date) -> bool:
        return day == self.today()

    @staticmethod
    def same_month(first: date, second: date) -> bool:
        return (first.year, first.month) == (second.year, second.month)


__all__ = ["DateLike", "HabitCalendar", "SUNDAY"]
