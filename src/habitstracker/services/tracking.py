"""Habit and log mutations: creation, progress logging and deletion."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Union

from ..dates import DateLike, HabitCalendar
from ..domain.repositories.habit import HabitRepository
from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.habit import FrequencyType, Habit, HabitLog
from .habits import is_completed

logger = get_logger("tracking")


class _Unset(Enum):
    """Marker for optional arguments that were not passed at all."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


# Patch marker: leave the stored note/photo untouched.
UNSET = _Unset.UNSET


def _require_number(value: object, *, field: str, allow_zero: bool) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be finite")
    if number < 0 or (number == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise ValidationError(f"{field} must be {qualifier}, got {value!r}")
    return number


def _parse_frequency(frequency_type: Union[FrequencyType, str]) -> FrequencyType:
    if isinstance(frequency_type, FrequencyType):
        return frequency_type
    try:
        return FrequencyType(str(frequency_type).strip().lower())
    except ValueError as exc:
        choices = ", ".join(ft.value for ft in FrequencyType)
        raise ValidationError(
            f"Unknown frequency type {frequency_type!r}; expected one of: {choices}"
        ) from exc


class HabitTracker:
    """Applies user commands to habits and their daily logs."""

    def __init__(self, repository: HabitRepository, calendar: HabitCalendar):
        self.repository = repository
        self.calendar = calendar

    # Habit management
    def add_habit(
        self,
        name: str,
        frequency_type: Union[FrequencyType, str],
        target_value: float,
    ) -> Habit:
        """Create and persist a habit."""

        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Habit name cannot be empty")
        frequency = _parse_frequency(frequency_type)
        target = _require_number(target_value, field="target_value", allow_zero=False)

        habit = Habit(
            name=clean_name,
            frequency_type=frequency,
            target_value=target,
            created_at=self.calendar.now(),
        )
        self.repository.insert(habit)
        self.repository.save()
        logger.info(
            "Habit created",
            extra={"habit_id": str(habit.id), "frequency_type": frequency.value},
        )
        return habit

    def rename_habit(self, habit: Habit, new_name: str) -> Optional[Habit]:
        """Rename a habit; blank names are ignored.

        Returns None when the habit no longer exists.
        """

        stored = self.repository.get_habit(habit.id)
        if stored is None:
            logger.warning("Rename of missing habit %s ignored", habit.id)
            return None

        clean_name = (new_name or "").strip()
        if not clean_name:
            logger.debug("Ignoring blank rename for habit %s", stored.id)
            return stored
        stored.name = clean_name
        self.repository.insert(stored)
        self.repository.save()
        return stored

    def delete_habit(self, habit: Habit) -> bool:
        """Delete a habit and all of its logs in one commit.

        Returns False when the habit no longer exists.
        """

        stored = self.repository.get_habit(habit.id)
        if stored is None:
            return False

        logs = self.repository.list_logs(stored.id)
        for log in logs:
            self.repository.delete(log)
        self.repository.delete(stored)
        self.repository.save()
        logger.info(
            "Habit deleted",
            extra={"habit_id": str(stored.id), "deleted_logs": len(logs)},
        )
        return True

    # Log management
    def log_progress(
        self,
        habit: Habit,
        day: Optional[DateLike] = None,
        *,
        value: float,
        note: Union[Optional[str], _Unset] = UNSET,
        photo_data: Union[Optional[bytes], _Unset] = UNSET,
    ) -> HabitLog:
        """Record progress for a day, updating that day's log when present.

        ``note`` and ``photo_data`` follow patch semantics: leaving them out
        keeps whatever is stored, passing ``None`` (or an empty value) clears
        the field. Raises ``ValidationError`` when the habit has been deleted.
        """

        amount = _require_number(value, field="value", allow_zero=True)
        if self.repository.get_habit(habit.id) is None:
            raise ValidationError(f"Habit {habit.name!r} no longer exists")
        occurred_on = self.calendar.start_of_day(day if day is not None else self.calendar.now())
        completed = is_completed(habit, amount)

        log = self.repository.get_log(habit.id, occurred_on)
        if log is None:
            log = HabitLog(
                habit_id=habit.id,
                occurred_on=occurred_on,
                value=amount,
                completed=completed,
                note=None if note is UNSET else (note or None),
                photo_data=None if photo_data is UNSET else (photo_data or None),
            )
            action = "created"
        else:
            log.value = amount
            log.completed = completed
            if note is not UNSET:
                log.note = note or None
            if photo_data is not UNSET:
                log.photo_data = photo_data or None
            action = "updated"

        self.repository.insert(log)
        self.repository.save()
        logger.info(
            "Habit log %s",
            action,
            extra={
                "habit_id": str(habit.id),
                "occurred_on": occurred_on.isoformat(),
                "completed": completed,
            },
        )
        return log

    def mark_complete(self, habit: Habit, day: Optional[DateLike] = None) -> HabitLog:
        """Log a full day: the target for daily habits, one unit for weekly ones."""

        value = 1.0 if habit.frequency_type.is_weekly else habit.target_value
        return self.log_progress(habit, day, value=value)

    def delete_log(self, habit: Habit, day: DateLike) -> bool:
        """Delete the log for ``day``; returns False when there was none."""

        occurred_on = self.calendar.start_of_day(day)
        log = self.repository.get_log(habit.id, occurred_on)
        if log is None:
            return False
        self.repository.delete(log)
        self.repository.save()
        logger.info(
            "Habit log deleted",
            extra={"habit_id": str(habit.id), "occurred_on": occurred_on.isoformat()},
        )
        return True

    # Lookups
    def get_all_habits(self) -> list[Habit]:
        return self.repository.list_habits()

    def get_logs(self, habit: Habit) -> list[HabitLog]:
        return self.repository.list_logs(habit.id)

    def get_all_logs(self) -> list[HabitLog]:
        return self.repository.list_all_logs()

    def get_log(self, habit: Habit, day: DateLike) -> Optional[HabitLog]:
        return self.repository.get_log(habit.id, self.calendar.start_of_day(day))

    def get_habit_for_log(self, log: HabitLog) -> Optional[Habit]:
        return self.repository.get_habit(log.habit_id)

    def find_habit(self, name: str) -> Optional[Habit]:
        """Look a habit up by its (case-insensitive) name."""

        wanted = name.strip().lower()
        for habit in self.repository.list_habits():
            if habit.name.lower() == wanted:
                return habit
        return None


__all__ = ["HabitTracker", "UNSET"]
