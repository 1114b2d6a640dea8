"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Iterable, Optional

from sqlmodel import Session, select

from ...domain.entries import CompletionEntry
from ...models.habit import Habit, HabitEntry


def to_completion_entries(rows: Iterable[HabitEntry]) -> list[CompletionEntry]:
    """Convert persisted rows into engine values."""
    return [row.to_completion() for row in rows]


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def get_by_name(self, name: str) -> Optional[Habit]:
        """Retrieve a habit by name."""
        with self.session_factory() as session:
            obj = session.exec(select(Habit).where(Habit.name == name)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, include_inactive: bool = False) -> list[Habit]:
        """List all habits, optionally including inactive ones."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(Habit.name)  # type: ignore

            if not include_inactive:
                statement = statement.where(Habit.is_active == True)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        return self.list_all(include_inactive=False)

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit.updated_at = datetime.now(timezone.utc)
            habit = session.merge(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: int) -> None:
        """Delete a habit and every entry recorded for it."""
        with self.session_factory() as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return
            for entry in session.exec(select(HabitEntry).where(HabitEntry.habit_id == habit_id)).all():
                session.delete(entry)
            session.flush()
            session.delete(habit)
            session.commit()

    # Habit entry operations
    def get_entry(self, habit_id: int, occurred_on: date) -> Optional[HabitEntry]:
        """Get the newest entry for a habit on a specific day."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .where(HabitEntry.occurred_on == occurred_on)
                .order_by(HabitEntry.id.desc())  # type: ignore
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_entries_for_habit(
        self, habit_id: int, start_date: date, end_date: date
    ) -> list[HabitEntry]:
        """Get entries for a habit within a date range."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .where(HabitEntry.occurred_on >= start_date)
                .where(HabitEntry.occurred_on <= end_date)
                .order_by(HabitEntry.occurred_on, HabitEntry.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_entries(self, habit_id: int) -> list[HabitEntry]:
        """Get every entry recorded for a habit."""
        with self.session_factory() as session:
            statement = (
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .order_by(HabitEntry.occurred_on, HabitEntry.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert_entry(self, entry: HabitEntry) -> HabitEntry:
        """Insert or update the entry for a habit/day."""
        with self.session_factory() as session:
            existing = session.exec(
                select(HabitEntry)
                .where(HabitEntry.habit_id == entry.habit_id)
                .where(HabitEntry.occurred_on == entry.occurred_on)
                .order_by(HabitEntry.id.desc())  # type: ignore
            ).first()

            if existing:
                existing.completed = entry.completed
                existing.reason = entry.reason
                existing.updated_at = datetime.now(timezone.utc)
                session.add(existing)
                session.commit()
                session.refresh(existing)
                session.expunge(existing)
                return existing

            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def delete_entry(self, habit_id: int, occurred_on: date) -> None:
        """Delete all entries for a habit on a day."""
        with self.session_factory() as session:
            rows = session.exec(
                select(HabitEntry)
                .where(HabitEntry.habit_id == habit_id)
                .where(HabitEntry.occurred_on == occurred_on)
            ).all()
            for row in rows:
                session.delete(row)
            session.commit()
