"""Unit tests for the SQLModel habit repository."""

from datetime import date, timedelta

import pytest
from conftest import NOW

from habitstracker.config import TestConfig
from habitstracker.errors import PersistenceError
from habitstracker.infra.database import bootstrap_database
from habitstracker.infra.repositories import SQLModelHabitRepository
from habitstracker.models import Habit, HabitLog


def test_fetch_all_sorts_by_key(repo, habit_factory):
    habit_factory(name="Bravo")
    habit_factory(name="Alpha")
    habit_factory(name="Charlie")

    assert [h.name for h in repo.fetch_all(Habit, "name")] == ["Alpha", "Bravo", "Charlie"]
    assert [h.name for h in repo.fetch_all(Habit, "name", descending=True)] == [
        "Charlie",
        "Bravo",
        "Alpha",
    ]


def test_fetch_where_applies_all_criteria(repo, habit_factory, log_factory):
    habit = habit_factory(target_value=10)
    log_factory(habit, date(2025, 1, 1), 10)
    log_factory(habit, date(2025, 1, 2), 3)
    log_factory(habit, date(2025, 1, 3), 11)

    rows = repo.fetch_where(
        HabitLog,
        HabitLog.habit_id == habit.id,
        HabitLog.completed == True,  # noqa: E712
        order_by=HabitLog.occurred_on,
    )

    assert [r.occurred_on for r in rows] == [date(2025, 1, 1), date(2025, 1, 3)]


def test_list_logs_newest_first_and_scoped(repo, habit_factory, log_factory):
    habit = habit_factory(name="Read")
    other = habit_factory(name="Run")
    for offset in (3, 1, 2):
        log_factory(habit, date(2025, 1, 1) + timedelta(days=offset))
    log_factory(other, date(2025, 2, 1))

    logs = repo.list_logs(habit.id)

    assert [log.occurred_on for log in logs] == [date(2025, 1, 4), date(2025, 1, 3), date(2025, 1, 2)]
    assert [log.occurred_on for log in repo.list_all_logs()][0] == date(2025, 2, 1)


def test_list_habits_in_creation_order(repo, habit_factory):
    habit_factory(name="Later", created_at=NOW)
    habit_factory(name="Earlier", created_at=NOW - timedelta(days=3))

    assert [h.name for h in repo.list_habits()] == ["Earlier", "Later"]


def test_get_log_hit_and_miss(repo, habit_factory, log_factory):
    habit = habit_factory()
    log = log_factory(habit, date(2025, 1, 1))

    assert repo.get_log(habit.id, date(2025, 1, 1)).id == log.id
    assert repo.get_log(habit.id, date(2025, 1, 2)) is None


def test_get_habit_miss_returns_none(repo):
    assert repo.get_habit(Habit(name="unsaved").id) is None


def test_duplicate_day_is_rejected_and_rolled_back(repo, habit_factory, log_factory):
    habit = habit_factory()
    log_factory(habit, date(2025, 1, 1), 1)

    repo.insert(HabitLog(habit_id=habit.id, occurred_on=date(2025, 1, 1), value=2, completed=True))
    with pytest.raises(PersistenceError):
        repo.save()

    logs = repo.list_logs(habit.id)
    assert len(logs) == 1
    assert logs[0].value == 1


def test_insert_delete_save_roundtrip(repo):
    habit = Habit(name="Stretch", target_value=1)
    repo.insert(habit)
    repo.save()
    assert repo.get_habit(habit.id) is not None

    repo.delete(habit)
    repo.save()
    assert repo.get_habit(habit.id) is None


def test_local_created_at_round_trips(repo, db_session):
    habit = Habit(name="Stretch", created_at=NOW)
    repo.insert(habit)
    repo.save()

    db_session.expire_all()
    stored = repo.get_habit(habit.id)

    assert stored.created_at == NOW
    assert stored.created_at.tzinfo is None


def test_bootstrap_database_creates_schema():
    engine, session = bootstrap_database(TestConfig())
    try:
        repo = SQLModelHabitRepository(session)
        repo.insert(Habit(name="Meditate"))
        repo.save()
        assert [h.name for h in repo.list_habits()] == ["Meditate"]
    finally:
        session.close()
        engine.dispose()
