"""Habit tracking tables."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..domain.entries import CompletionEntry
from ..domain.frequency import Frequency


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Habit(SQLModel, table=True):
    """A recurring task tracked against a frequency rule."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=100, index=True)
    description: str = Field(default="", max_length=500)
    frequency: str = Field(default=Frequency.DAILY.value, max_length=32)
    start_date: date = Field(nullable=False, index=True)
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    entries: list["HabitEntry"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship("HabitEntry", back_populates="habit"),
    )

    @property
    def rule(self) -> Frequency:
        return Frequency.parse(self.frequency)


class HabitEntry(SQLModel, table=True):
    """Completion record for a habit on a calendar day."""

    __tablename__: ClassVar[str] = "habit_entry"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    completed: bool = Field(default=True, nullable=False)
    reason: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="entries",
        sa_relationship=relationship("Habit", back_populates="entries"),
    )

    def to_completion(self) -> CompletionEntry:
        """Detach into the immutable value the scheduling engine consumes."""
        return CompletionEntry(
            habit_id=self.habit_id,
            occurred_on=self.occurred_on,
            completed=self.completed,
            reason=self.reason,
            sequence=self.id or 0,
        )
