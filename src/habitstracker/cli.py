"""Command line interface for the habit tracker."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import PersistenceError, ValidationError
from .logging_config import setup_logging
from .models.habit import FrequencyType, Habit, format_value
from .models.views import IntensityLevel, TimePeriod, WeekData
from .services.reminders import ReminderScheduler

INTENSITY_SYMBOLS = {
    IntensityLevel.NONE: "·",
    IntensityLevel.LOW: "░",
    IntensityLevel.MEDIUM: "▒",
    IntensityLevel.HIGH: "▓",
    IntensityLevel.VERY_HIGH: "█",
}

DATE_OPTION = click.DateTime(formats=["%Y-%m-%d"])


def _require_habit(app: AppContext, name: str) -> Habit:
    habit = app.tracker.find_habit(name)
    if habit is None:
        raise click.ClickException(f"No habit named {name!r}")
    return habit


def _render_weeks(weeks: list[WeekData], *, dim_other_months: bool = False) -> list[str]:
    lines = []
    for week in weeks:
        cells = []
        for day in week.days:
            symbol = INTENSITY_SYMBOLS[day.intensity]
            if dim_other_months and not day.is_current_month:
                symbol = " "
            cells.append(f"[{symbol}]" if day.is_today else f" {symbol} ")
        lines.append(f"{week.start.isoformat()} {''.join(cells)}")
    return lines


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Track habits, log progress and review streaks."""

    config = BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    ctx.obj = app
    ctx.call_on_close(app.close)


@main.command("add")
@click.argument("name")
@click.option(
    "--type",
    "frequency_type",
    type=click.Choice([ft.value for ft in FrequencyType]),
    default=FrequencyType.DAILY.value,
    show_default=True,
)
@click.option("--target", type=float, default=1.0, show_default=True)
@click.pass_obj
def add_habit(app: AppContext, name: str, frequency_type: str, target: float) -> None:
    """Create a habit."""

    try:
        habit = app.tracker.add_habit(name, frequency_type, target)
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc
    except PersistenceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Added {habit.name} ({habit.subtitle})")


@main.command("list")
@click.pass_obj
def list_habits(app: AppContext) -> None:
    """Show every habit with today's and this week's progress."""

    habits = app.tracker.get_all_habits()
    if not habits:
        click.echo("No habits yet. Add one with `habits add NAME`.")
        return
    for habit in habits:
        click.echo(
            f"{habit.name} - {habit.subtitle} | "
            f"Today: {format_value(app.insights.today_value(habit))} | "
            f"This week: {format_value(app.insights.week_value(habit))} | "
            f"Streak: {app.insights.current_streak(habit)}"
        )


@main.command("log")
@click.argument("name")
@click.argument("value", type=float)
@click.option("--date", "day", type=DATE_OPTION, default=None, help="Day to log (YYYY-MM-DD).")
@click.option("--note", default=None, help="Replace the day's note.")
@click.pass_obj
def log_progress(
    app: AppContext, name: str, value: float, day: Optional[datetime], note: Optional[str]
) -> None:
    """Log progress for a habit on one day."""

    habit = _require_habit(app, name)
    kwargs = {} if note is None else {"note": note}
    try:
        log = app.tracker.log_progress(habit, day, value=value, **kwargs)
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc
    except PersistenceError as exc:
        raise click.ClickException(str(exc)) from exc
    status = "completed" if log.completed else "in progress"
    click.echo(f"{habit.name} {log.occurred_on.isoformat()}: {format_value(log.value)} ({status})")


@main.command("done")
@click.argument("name")
@click.option("--date", "day", type=DATE_OPTION, default=None)
@click.pass_obj
def mark_complete(app: AppContext, name: str, day: Optional[datetime]) -> None:
    """Mark a habit complete for a day."""

    habit = _require_habit(app, name)
    try:
        log = app.tracker.mark_complete(habit, day)
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc
    except PersistenceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{habit.name} completed on {log.occurred_on.isoformat()}")


@main.command("undo")
@click.argument("name")
@click.option("--date", "day", type=DATE_OPTION, default=None)
@click.pass_obj
def delete_log(app: AppContext, name: str, day: Optional[datetime]) -> None:
    """Remove a day's log."""

    habit = _require_habit(app, name)
    target_day = day or app.calendar.now()
    try:
        deleted = app.tracker.delete_log(habit, target_day)
    except PersistenceError as exc:
        raise click.ClickException(str(exc)) from exc
    if deleted:
        click.echo(f"Removed {habit.name} log for {app.calendar.start_of_day(target_day).isoformat()}")
    else:
        click.echo("Nothing logged for that day.")


@main.command("rename")
@click.argument("name")
@click.argument("new_name")
@click.pass_obj
def rename_habit(app: AppContext, name: str, new_name: str) -> None:
    """Rename a habit."""

    habit = _require_habit(app, name)
    try:
        renamed = app.tracker.rename_habit(habit, new_name)
    except PersistenceError as exc:
        raise click.ClickException(str(exc)) from exc
    if renamed is None:
        raise click.ClickException(f"No habit named {name!r}")
    click.echo(f"Habit is now called {renamed.name}")


@main.command("delete")
@click.argument("name")
@click.confirmation_option(prompt="Delete this habit and all of its logs?")
@click.pass_obj
def delete_habit(app: AppContext, name: str) -> None:
    """Delete a habit and its history."""

    habit = _require_habit(app, name)
    try:
        app.tracker.delete_habit(habit)
    except PersistenceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Deleted {name}")


@main.command("stats")
@click.argument("name")
@click.option(
    "--period",
    type=click.Choice([p.value for p in TimePeriod]),
    default=TimePeriod.WEEK.value,
    show_default=True,
)
@click.pass_obj
def show_stats(app: AppContext, name: str, period: str) -> None:
    """Show lifetime and period statistics."""

    habit = _require_habit(app, name)
    time_period = TimePeriod(period)
    stats = app.insights.statistics_for_period(habit, time_period)
    insights = app.insights

    click.echo(f"{habit.name} ({habit.subtitle})")
    click.echo(f"  Current streak: {insights.current_streak(habit)}")
    click.echo(f"  Best streak:    {insights.longest_streak(habit)}")
    click.echo(f"  Total days:     {insights.total_days(habit)}")
    click.echo(f"  Completion:     {int(insights.completion_rate(habit) * 100)}%")
    click.echo(f"  Total logged:   {format_value(insights.total_completed(habit))}")
    click.echo(f"Last {time_period.display_name.lower()}:")
    click.echo(f"  Completed days: {stats.completed_days}")
    click.echo(f"  Total value:    {format_value(stats.total_value)}")
    click.echo(f"  Completion:     {int(stats.completion_rate * 100)}%")
    click.echo(f"  Best streak:    {stats.longest_streak}")


@main.command("heatmap")
@click.argument("name")
@click.option("--month", is_flag=True, help="Show the current month instead of 12 weeks.")
@click.pass_obj
def show_heatmap(app: AppContext, name: str, month: bool) -> None:
    """Print a heat-map of recent progress."""

    habit = _require_habit(app, name)
    if month:
        weeks = app.insights.current_month_calendar(habit)
    else:
        weeks = app.insights.last_12_weeks(habit)
    for line in _render_weeks(weeks, dim_other_months=month):
        click.echo(line)
    legend = " ".join(INTENSITY_SYMBOLS[level] for level in IntensityLevel)
    click.echo(f"Less {legend} More")


@main.command("feed")
@click.option("--limit", type=int, default=20, show_default=True)
@click.pass_obj
def show_feed(app: AppContext, limit: int) -> None:
    """List recent activity across all habits."""

    logs = app.tracker.get_all_logs()[:limit]
    if not logs:
        click.echo("No activity yet. Start logging your habits to see them here!")
        return
    for log in logs:
        habit = app.tracker.get_habit_for_log(log)
        habit_name = habit.name if habit is not None else "(deleted habit)"
        mark = "✓" if log.completed else " "
        line = f"{log.occurred_on.isoformat()} {mark} {habit_name}: {format_value(log.value)}"
        if log.note:
            line += f" ({log.note})"
        click.echo(line)


@main.command("remind")
@click.option("--now", "send_now", is_flag=True, help="Send the reminder once and exit.")
@click.pass_obj
def remind(app: AppContext, send_now: bool) -> None:
    """Run the daily check-in reminder in the foreground."""

    reminders = app.reminders or ReminderScheduler(
        app.config, lambda title, body: click.echo(f"{title}: {body}")
    )
    app.reminders = reminders
    if send_now:
        reminders.send_reminder()
        return

    reminders.start()
    job = reminders.schedule_daily_reminder()
    click.echo(f"Next reminder at {job.next_run_time:%Y-%m-%d %H:%M}. Press Ctrl+C to stop.")
    try:
        while True:
            time.sleep(60)
    except KeyboardInterrupt:
        click.echo("Stopping reminders.")


if __name__ == "__main__":  # pragma: no cover
    main()
