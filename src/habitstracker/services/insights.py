"""Read-side statistics and heat-map grids for a habit."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from ..dates import HabitCalendar
from ..domain.repositories.habit import HabitRepository
from ..models.habit import Habit, HabitLog
from ..models.views import DayData, PeriodStatistics, TimePeriod, WeekData
from .habits import (
    DEFAULT_STREAK_LOOKBACK_DAYS,
    calculate_intensity,
    current_streak,
    longest_streak,
)

HEATMAP_WEEKS = 12


class HabitInsights:
    """Derives streaks, rates and calendar views from a habit's logs."""

    def __init__(
        self,
        repository: HabitRepository,
        calendar: HabitCalendar,
        *,
        streak_lookback_days: int = DEFAULT_STREAK_LOOKBACK_DAYS,
    ):
        self.repository = repository
        self.calendar = calendar
        self.streak_lookback_days = streak_lookback_days

    def _logs(self, habit: Habit) -> list[HabitLog]:
        return self.repository.list_logs(habit.id)

    # Lifetime statistics
    def today_value(self, habit: Habit) -> float:
        log = self.repository.get_log(habit.id, self.calendar.today())
        return log.value if log is not None else 0.0

    def week_value(self, habit: Habit) -> float:
        """Sum of values logged in the trailing week, boundary day included."""
        since = self.calendar.add_days(self.calendar.today(), -7)
        return sum(log.value for log in self._logs(habit) if log.occurred_on >= since)

    def total_days(self, habit: Habit) -> int:
        return sum(1 for log in self._logs(habit) if log.completed)

    def perfect_days(self, habit: Habit) -> int:
        # A perfect day is currently any completed day.
        return self.total_days(habit)

    def total_completed(self, habit: Habit) -> float:
        return sum(log.value for log in self._logs(habit))

    def completion_rate(self, habit: Habit) -> float:
        """Completed days over every day since the habit was created."""
        days_since_creation = self.calendar.elapsed_days(habit.created_at)
        total = max(days_since_creation + 1, 1)
        return self.total_days(habit) / total

    def current_streak(self, habit: Habit) -> int:
        return current_streak(
            self._logs(habit),
            today=self.calendar.today(),
            lookback_days=self.streak_lookback_days,
        )

    def longest_streak(self, habit: Habit) -> int:
        return longest_streak(self._logs(habit))

    # Period statistics
    def statistics_for_period(self, habit: Habit, period: TimePeriod) -> PeriodStatistics:
        """Aggregate the trailing window for ``period``.

        The completion rate always divides by the full window length, even for
        habits younger than the window.
        """
        start = self.calendar.add_days(self.calendar.today(), -period.days)
        logs = [log for log in self._logs(habit) if log.occurred_on >= start]
        completed_days = sum(1 for log in logs if log.completed)

        return PeriodStatistics(
            completed_days=completed_days,
            total_value=sum(log.value for log in logs),
            completion_rate=completed_days / period.days,
            longest_streak=longest_streak(logs, since=start),
        )

    # Grids
    def current_week(self, habit: Habit) -> list[DayData]:
        """Seven days of the week containing today."""
        by_day = self._by_day(self._logs(habit))
        start = self.calendar.week_start(self.calendar.today())
        return [self._day(habit, day, by_day) for day in self.calendar.week_days(start)]

    def weeks_for_period(self, habit: Habit, period: TimePeriod) -> list[WeekData]:
        return self._trailing_weeks(habit, period.weeks)

    def last_12_weeks(self, habit: Habit) -> list[WeekData]:
        return self._trailing_weeks(habit, HEATMAP_WEEKS)

    def current_month_calendar(self, habit: Habit) -> list[WeekData]:
        """Month grid for today's month; padding days are flagged out-of-month."""
        today = self.calendar.today()
        by_day = self._by_day(self._logs(habit))

        weeks = []
        for row in self.calendar.month_weeks(today.year, today.month):
            weeks.append(
                WeekData(
                    days=[
                        self._day(
                            habit,
                            day,
                            by_day,
                            is_current_month=self.calendar.same_month(day, today),
                        )
                        for day in row
                    ]
                )
            )
        return weeks

    def _trailing_weeks(self, habit: Habit, count: int) -> list[WeekData]:
        """``count`` week rows, oldest first, the last one holding today."""
        by_day = self._by_day(self._logs(habit))
        current_start = self.calendar.week_start(self.calendar.today())

        weeks = []
        for offset in reversed(range(count)):
            start = self.calendar.add_days(current_start, -7 * offset)
            weeks.append(
                WeekData(days=[self._day(habit, day, by_day) for day in self.calendar.week_days(start)])
            )
        return weeks

    @staticmethod
    def _by_day(logs: Iterable[HabitLog]) -> dict[date, HabitLog]:
        return {log.occurred_on: log for log in logs}

    def _day(
        self,
        habit: Habit,
        day: date,
        by_day: dict[date, HabitLog],
        *,
        is_current_month: bool = True,
    ) -> DayData:
        log = by_day.get(day)
        return DayData(
            day=day,
            intensity=calculate_intensity(habit, log),
            is_today=self.calendar.is_today(day),
            log=log,
            is_current_month=is_current_month,
        )


__all__ = ["HEATMAP_WEEKS", "HabitInsights"]
