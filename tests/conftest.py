"""Pytest configuration and shared fixtures for habitstracker tests.

This module provides database fixtures, a fixed clock, and factories for
habits and logs so domain logic, repositories and services can be tested
without touching a real data directory.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from habitstracker.dates import SUNDAY, HabitCalendar
from habitstracker.infra.repositories import SQLModelHabitRepository
from habitstracker.logging_config import ROOT_LOGGER_NAME
from habitstracker.models import FrequencyType, Habit, HabitLog
from habitstracker.services.habits import is_completed
from habitstracker.services.insights import HabitInsights
from habitstracker.services.tracking import HabitTracker

# Wednesday; the Sunday-based week runs 2025-03-09 .. 2025-03-15.
NOW = datetime(2025, 3, 12, 10, 30)
TODAY = NOW.date()


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point configuration at a throwaway data directory."""

    monkeypatch.setenv("HABITSTRACKER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("HABITSTRACKER_DEV_MODE", "false")
    for name in (
        "HABITSTRACKER_DATABASE_URL",
        "HABITSTRACKER_STREAK_LOOKBACK_DAYS",
        "HABITSTRACKER_FIRST_WEEKDAY",
        "HABITSTRACKER_REMINDER_HOUR",
        "HABITSTRACKER_REMINDER_MINUTE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    # Drop handlers installed by setup_logging so files can be cleaned up.
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create the session shared by the repository under test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db_session) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(db_session)


@pytest.fixture
def calendar() -> HabitCalendar:
    """Sunday-first calendar frozen at NOW."""
    return HabitCalendar(first_weekday=SUNDAY, clock=lambda: NOW)


@pytest.fixture
def tracker(repo, calendar) -> HabitTracker:
    return HabitTracker(repo, calendar)


@pytest.fixture
def insights(repo, calendar) -> HabitInsights:
    return HabitInsights(repo, calendar)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        frequency_type: FrequencyType = FrequencyType.DAILY,
        target_value: float = 1.0,
        created_at: Optional[datetime] = None,
    ) -> Habit:
        habit = Habit(
            name=name,
            frequency_type=frequency_type,
            target_value=target_value,
            created_at=created_at or NOW,
        )
        db_session.add(habit)
        db_session.commit()
        return habit

    return _create_habit


@pytest.fixture
def log_factory(db_session):
    """Factory for creating persisted logs with derived completion.

    Returns:
        Callable: Function that creates and persists HabitLog instances
    """

    def _create_log(
        habit: Habit,
        occurred_on: date,
        value: Optional[float] = None,
        note: Optional[str] = None,
    ) -> HabitLog:
        if value is None:
            value = habit.target_value
        log = HabitLog(
            habit_id=habit.id,
            occurred_on=occurred_on,
            value=value,
            completed=is_completed(habit, value),
            note=note,
        )
        db_session.add(log)
        db_session.commit()
        return log

    return _create_log
