"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitEntry


class HabitRepository(Protocol):
    """Repository for managing habits and their completion entries."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def get_by_name(self, name: str) -> Optional[Habit]:
        """Retrieve a habit by name."""
        ...

    def list_all(self, include_inactive: bool = False) -> list[Habit]:
        """List all habits, optionally including inactive ones."""
        ...

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int) -> None:
        """Delete a habit and its entries."""
        ...

    # Habit entry operations
    def get_entry(self, habit_id: int, occurred_on: date) -> Optional[HabitEntry]:
        """Get the entry for a habit on a specific day."""
        ...

    def get_entries_for_habit(
        self, habit_id: int, start_date: date, end_date: date
    ) -> list[HabitEntry]:
        """Get entries for a habit within a date range."""
        ...

    def list_entries(self, habit_id: int) -> list[HabitEntry]:
        """Get every entry recorded for a habit."""
        ...

    def upsert_entry(self, entry: HabitEntry) -> HabitEntry:
        """Insert or update the entry for a habit/day."""
        ...

    def delete_entry(self, habit_id: int, occurred_on: date) -> None:
        """Delete a habit entry."""
        ...
