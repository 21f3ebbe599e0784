"""SQLModel implementation of the habit persistence gateway."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...errors import PersistenceError
from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog

logger = get_logger("repository")

EntityT = TypeVar("EntityT")


class SQLModelHabitRepository:
    """SQLModel-based gateway holding one session as its unit of work."""

    def __init__(self, session: Session):
        """Initialize with an open session."""
        self.session = session

    def insert(self, entity: Any) -> None:
        self.session.add(entity)

    def delete(self, entity: Any) -> None:
        self.session.delete(entity)

    def save(self) -> None:
        """Commit pending changes; roll them back and raise on failure."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Commit failed; pending changes rolled back")
            raise PersistenceError(f"Could not save changes: {exc}") from exc

    def fetch_all(
        self, model: type[EntityT], sort_key: str, descending: bool = False
    ) -> list[EntityT]:
        column = getattr(model, sort_key)
        statement = select(model).order_by(column.desc() if descending else column)
        return list(self.session.exec(statement).all())

    def fetch_where(
        self, model: type[EntityT], *criteria: Any, order_by: Any = None
    ) -> list[EntityT]:
        statement = select(model).where(*criteria)
        if order_by is not None:
            statement = statement.order_by(order_by)
        return list(self.session.exec(statement).all())

    # Convenience lookups
    def get_habit(self, habit_id: uuid.UUID) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        rows = self.fetch_where(Habit, Habit.id == habit_id)
        return rows[0] if rows else None

    def list_habits(self) -> list[Habit]:
        """List habits in creation order."""
        return self.fetch_all(Habit, "created_at")

    def list_logs(self, habit_id: uuid.UUID) -> list[HabitLog]:
        """List a habit's logs, newest first."""
        return self.fetch_where(
            HabitLog,
            HabitLog.habit_id == habit_id,
            order_by=HabitLog.occurred_on.desc(),  # type: ignore[attr-defined]
        )

    def list_all_logs(self) -> list[HabitLog]:
        """List every log, newest first."""
        return self.fetch_all(HabitLog, "occurred_on", descending=True)

    def get_log(self, habit_id: uuid.UUID, occurred_on: date) -> Optional[HabitLog]:
        """Get the log for a habit on one day."""
        rows = self.fetch_where(
            HabitLog,
            HabitLog.habit_id == habit_id,
            HabitLog.occurred_on == occurred_on,
        )
        return rows[0] if rows else None
