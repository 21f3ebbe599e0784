"""Exception types raised by the habit services."""

from __future__ import annotations


class HabitsTrackerError(Exception):
    """Base class for all errors raised by habitstracker."""


class ValidationError(HabitsTrackerError, ValueError):
    """Input was rejected before any mutation was attempted."""


class PersistenceError(HabitsTrackerError, RuntimeError):
    """A commit failed; the attempted mutation has been rolled back."""


__all__ = ["HabitsTrackerError", "PersistenceError", "ValidationError"]
