"""Database infrastructure for the habit store."""

from __future__ import annotations

from typing import Tuple

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())

    if engine.dialect.name == "sqlite" and config.DATABASE_URL != "sqlite://":
        pragmas = dict(config.SQLITE_PRAGMAS)

        @event.listens_for(engine, "connect")
        def _apply_pragmas(dbapi_connection, _record):  # pragma: no cover - driver hook
            cursor = dbapi_connection.cursor()
            for key, value in pragmas.items():
                cursor.execute(f"PRAGMA {key}={value}")
            cursor.close()

    return engine


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def open_session(engine: Engine) -> Session:
    """Open the long-lived session backing one application context."""
    return Session(engine, expire_on_commit=False)


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, Session]:
    """Convenience bootstrap for engine + session with schema init.

    Used by the application context and tests to ensure consistent engine
    options. Returns (engine, session).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, open_session(engine)
