"""Service module exports."""

from . import habits, insights, reminders, tracking

__all__ = ["habits", "insights", "reminders", "tracking"]
