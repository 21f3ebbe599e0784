"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from .config import BaseConfig
from .dates import HabitCalendar
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelHabitRepository
from .services.insights import HabitInsights
from .services.reminders import Notifier, ReminderScheduler
from .services.tracking import HabitTracker


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    engine: Engine
    session: Session
    calendar: HabitCalendar
    habit_repo: SQLModelHabitRepository
    tracker: HabitTracker
    insights: HabitInsights
    reminders: Optional[ReminderScheduler] = None

    def close(self) -> None:
        """Stop background work and release the database."""
        if self.reminders is not None:
            self.reminders.stop()
        self.session.close()
        self.engine.dispose()


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    clock: Optional[Callable[[], datetime]] = None,
    notifier: Optional[Notifier] = None,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine, session = bootstrap_database(config)
    calendar = HabitCalendar(first_weekday=config.FIRST_WEEKDAY, clock=clock)
    habit_repo = SQLModelHabitRepository(session)

    return AppContext(
        config=config,
        engine=engine,
        session=session,
        calendar=calendar,
        habit_repo=habit_repo,
        tracker=HabitTracker(habit_repo, calendar),
        insights=HabitInsights(
            habit_repo, calendar, streak_lookback_days=config.STREAK_LOOKBACK_DAYS
        ),
        reminders=ReminderScheduler(config, notifier) if notifier is not None else None,
    )
