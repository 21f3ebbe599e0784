"""SQLModel table and view-model exports."""

from .habit import FrequencyType, Habit, HabitLog, format_value
from .views import DayData, IntensityLevel, PeriodStatistics, TimePeriod, WeekData

__all__ = [
    "DayData",
    "FrequencyType",
    "Habit",
    "HabitLog",
    "IntensityLevel",
    "PeriodStatistics",
    "TimePeriod",
    "WeekData",
    "format_value",
]
