"""Daily check-in reminder backed by APScheduler."""

from __future__ import annotations

from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger("reminders")

REMINDER_JOB_ID = "daily_habit_reminder"
REMINDER_TITLE = "Habit Check-in"
REMINDER_BODY = "Did you complete your habits today?"

Notifier = Callable[[str, str], None]


class ReminderScheduler:
    """Schedules the repeating evening reminder.

    The notifier receives ``(title, body)``; delivering it (desktop toast,
    terminal bell, push) is up to the caller that constructs this service.
    """

    def __init__(self, config: BaseConfig, notifier: Notifier):
        self.config = config
        self.notifier = notifier
        self.scheduler = BackgroundScheduler()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        """Start the background scheduler."""
        if self.scheduler.running:
            logger.warning("Reminder scheduler already running")
            return
        self.scheduler.start()
        logger.info("Reminder scheduler started")

    def stop(self) -> None:
        """Stop the background scheduler without waiting for running jobs."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Reminder scheduler stopped")

    def schedule_daily_reminder(self):
        """Register (or replace) the daily reminder job and return it."""
        job = self.scheduler.add_job(
            func=self.send_reminder,
            trigger=CronTrigger(hour=self.config.REMINDER_HOUR, minute=self.config.REMINDER_MINUTE),
            id=REMINDER_JOB_ID,
            name="Daily Habit Reminder",
            replace_existing=True,
        )
        logger.info(
            "Scheduled daily reminder at %02d:%02d",
            self.config.REMINDER_HOUR,
            self.config.REMINDER_MINUTE,
        )
        return job

    def cancel(self) -> bool:
        """Remove the reminder job; returns False when none was scheduled."""
        if self.scheduler.get_job(REMINDER_JOB_ID) is None:
            return False
        self.scheduler.remove_job(REMINDER_JOB_ID)
        logger.info("Daily reminder cancelled")
        return True

    def send_reminder(self) -> None:
        """Deliver the reminder through the notifier."""
        try:
            self.notifier(REMINDER_TITLE, REMINDER_BODY)
        except Exception as exc:
            logger.error(f"Reminder delivery failed: {exc}", exc_info=True)
