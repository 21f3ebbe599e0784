"""End-to-end tests for the click command line."""

from __future__ import annotations

from datetime import date

import pytest
from click.testing import CliRunner
from conftest import NOW, TODAY

from habitstracker import create_app_context
from habitstracker.cli import main
from habitstracker.config import TestConfig


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner):
    def _invoke(*args):
        return runner.invoke(main, list(args))

    return _invoke


def test_full_habit_workflow(invoke):
    result = invoke("add", "Read", "--target", "10")
    assert result.exit_code == 0, result.output
    assert result.output.startswith("Added Read")

    result = invoke("log", "read", "4")
    assert result.exit_code == 0, result.output
    assert f"Read {date.today().isoformat()}: 4 (in progress)" in result.output

    result = invoke("list")
    assert "Read" in result.output
    assert "Today: 4" in result.output

    result = invoke("done", "Read")
    assert f"Read completed on {date.today().isoformat()}" in result.output

    result = invoke("stats", "Read", "--period", "month")
    assert result.exit_code == 0, result.output
    assert "Current streak: 1" in result.output
    assert "Last month:" in result.output

    result = invoke("heatmap", "Read")
    assert result.exit_code == 0, result.output
    assert len(result.output.splitlines()) == 13
    assert result.output.splitlines()[-1].startswith("Less")

    result = invoke("heatmap", "Read", "--month")
    assert result.exit_code == 0, result.output

    result = invoke("feed")
    assert "Read: 10" in result.output

    result = invoke("delete", "Read", "--yes")
    assert result.exit_code == 0, result.output
    assert "Deleted Read" in result.output

    assert "No habits yet" in invoke("list").output
    assert "No activity yet" in invoke("feed").output


def test_backdated_log_and_undo(invoke):
    invoke("add", "Run", "--type", "times_per_week", "--target", "3")

    result = invoke("log", "Run", "1", "--date", "2025-01-05", "--note", "park loop")
    assert "Run 2025-01-05: 1 (completed)" in result.output
    assert "(park loop)" in invoke("feed").output

    assert "Removed Run log for 2025-01-05" in invoke("undo", "Run", "--date", "2025-01-05").output
    assert "Nothing logged" in invoke("undo", "Run", "--date", "2025-01-05").output


def test_rename(invoke):
    invoke("add", "Read")

    assert "Habit is now called Reading" in invoke("rename", "Read", "Reading").output
    assert "Reading" in invoke("list").output


def test_blank_name_is_usage_error(invoke):
    result = invoke("add", "   ")

    assert result.exit_code == 2
    assert "name" in result.output.lower()


def test_non_positive_target_is_usage_error(invoke):
    assert invoke("add", "Read", "--target", "0").exit_code == 2


def test_unknown_habit(invoke):
    result = invoke("log", "Nope", "1")

    assert result.exit_code == 1
    assert "No habit named 'Nope'" in result.output


def test_delete_requires_confirmation(invoke):
    invoke("add", "Read")

    result = invoke("delete", "Read")

    assert result.exit_code != 0
    assert "Read" in invoke("list").output


def test_remind_now(invoke):
    result = invoke("remind", "--now")

    assert result.exit_code == 0, result.output
    assert "Habit Check-in: Did you complete your habits today?" in result.output


def test_create_app_context_wires_services():
    sent = []
    app = create_app_context(TestConfig(), clock=lambda: NOW, notifier=lambda t, b: sent.append(t))
    try:
        habit = app.tracker.add_habit("Stretch", "daily", 1)
        app.tracker.mark_complete(habit)

        assert app.calendar.today() == TODAY
        assert app.insights.current_streak(habit) == 1
        assert app.habit_repo.list_habits()[0].id == habit.id

        app.reminders.send_reminder()
        assert sent == ["Habit Check-in"]
    finally:
        app.close()
