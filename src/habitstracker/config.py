"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Interpret environment variable values as integers."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitsTracker"
    DB_FILENAME = "habits.db"
    ENV_PREFIX = "HABITSTRACKER_"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool(self._env("DEV_MODE"), default=True)
        self.DATABASE_URL = os.getenv(self._env("DATABASE_URL"), self._build_sqlite_url())
        # Current streaks longer than this many days under-report.
        self.STREAK_LOOKBACK_DAYS = _env_int(self._env("STREAK_LOOKBACK_DAYS"), 365)
        # Monday=0 ... Sunday=6, as in the stdlib calendar module.
        self.FIRST_WEEKDAY = _env_int(self._env("FIRST_WEEKDAY"), 6)
        self.REMINDER_HOUR = _env_int(self._env("REMINDER_HOUR"), 21)
        self.REMINDER_MINUTE = _env_int(self._env("REMINDER_MINUTE"), 0)

        if self.STREAK_LOOKBACK_DAYS < 1:
            raise ValueError("STREAK_LOOKBACK_DAYS must be at least 1.")
        if not 0 <= self.FIRST_WEEKDAY <= 6:
            raise ValueError("FIRST_WEEKDAY must be between 0 (Monday) and 6 (Sunday).")
        if not 0 <= self.REMINDER_HOUR <= 23 or not 0 <= self.REMINDER_MINUTE <= 59:
            raise ValueError("Reminder time must be a valid hour and minute.")

    def _env(self, name: str) -> str:
        return f"{self.ENV_PREFIX}{name}"

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv(self._env("DATA_DIR"), "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to per-user storage.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration: local SQLite with verbose console logging."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; keeps everything in memory."""

    __test__ = False

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
