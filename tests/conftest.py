"""Pytest configuration and shared fixtures for HabitCadence tests.

Provides an isolated SQLite database per test, a session factory matching the
repository contract, and factories for habits and entries.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from habitcadence.infra.database import create_session_factory
from habitcadence.infra.repositories.habit import SQLModelHabitRepository
from habitcadence.models import Habit, HabitEntry


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep config-created directories and env overrides inside tmp_path."""
    monkeypatch.setenv("HABITCADENCE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("HABITCADENCE_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITCADENCE_TIMEZONE", raising=False)
    monkeypatch.delenv("HABITCADENCE_RECENT_DAYS", raising=False)
    monkeypatch.delenv("HABITCADENCE_DEV_MODE", raising=False)


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
    """Database session for arranging rows directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory in the shape repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


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
        name: str = "Exercise",
        frequency: str = "daily",
        start_date: date = date(2024, 1, 1),
        description: str = "",
        is_active: bool = True,
    ) -> Habit:
        habit = Habit(
            name=name,
            frequency=frequency,
            start_date=start_date,
            description=description,
            is_active=is_active,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def entry_factory(db_session):
    """Factory for creating persisted habit entries."""

    def _create_entry(
        habit: Habit,
        occurred_on: date,
        completed: bool = True,
        reason: str | None = None,
    ) -> HabitEntry:
        entry = HabitEntry(
            habit_id=habit.id,
            occurred_on=occurred_on,
            completed=completed,
            reason=reason,
        )
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry

    return _create_entry

