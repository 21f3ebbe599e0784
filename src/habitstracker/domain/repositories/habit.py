"""Habit persistence gateway protocol."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional, Protocol, TypeVar

from ...models.habit import Habit, HabitLog

EntityT = TypeVar("EntityT")


class HabitRepository(Protocol):
    """Unit-of-work style gateway over the Habit and HabitLog collections.

    ``insert`` and ``delete`` only stage changes; ``save`` is the single commit
    point and must leave no staged change behind when it fails.
    """

    def insert(self, entity: Any) -> None:
        """Stage a new or modified entity for the next save."""
        ...

    def delete(self, entity: Any) -> None:
        """Stage an entity for deletion on the next save."""
        ...

    def save(self) -> None:
        """Commit staged changes, raising PersistenceError after a rollback."""
        ...

    def fetch_all(
        self, model: type[EntityT], sort_key: str, descending: bool = False
    ) -> list[EntityT]:
        """Return every row of ``model`` ordered by ``sort_key``."""
        ...

    def fetch_where(
        self, model: type[EntityT], *criteria: Any, order_by: Any = None
    ) -> list[EntityT]:
        """Return rows of ``model`` matching all ``criteria``."""
        ...

    # Convenience lookups
    def get_habit(self, habit_id: uuid.UUID) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_habits(self) -> list[Habit]:
        """List habits, oldest first."""
        ...

    def list_logs(self, habit_id: uuid.UUID) -> list[HabitLog]:
        """List a habit's logs, newest first."""
        ...

    def list_all_logs(self) -> list[HabitLog]:
        """List every log, newest first."""
        ...

    def get_log(self, habit_id: uuid.UUID, occurred_on: date) -> Optional[HabitLog]:
        """Get the log for a habit on one day."""
        ...
