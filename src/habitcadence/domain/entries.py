"""Completion entry value type and per-date deduplication."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Hashable, Iterable, Optional


@dataclass(frozen=True, slots=True)
class CompletionEntry:
    """Whether a habit was done (or explicitly not done) on a calendar day.

    ``sequence`` orders entries that share a date: the greatest value is the
    newest and wins. Persisted rows use their primary key.
    """

    habit_id: Hashable
    occurred_on: date
    completed: bool
    reason: Optional[str] = None
    sequence: int = 0


def latest_by_date(
    entries: Iterable[CompletionEntry], habit_id: Hashable
) -> dict[date, CompletionEntry]:
    """Map each date to its newest entry for ``habit_id``.

    Ties on ``sequence`` resolve to the entry seen last.
    """

    latest: dict[date, CompletionEntry] = {}
    for entry in entries:
        if entry.habit_id != habit_id:
            continue
        current = latest.get(entry.occurred_on)
        if current is None or entry.sequence >= current.sequence:
            latest[entry.occurred_on] = entry
    return latest


def completed_dates(entries: Iterable[CompletionEntry], habit_id: Hashable) -> list[date]:
    """Sorted unique dates whose newest entry is a completion."""

    latest = latest_by_date(entries, habit_id)
    return sorted(day for day, entry in latest.items() if entry.completed)


__all__ = ["CompletionEntry", "completed_dates", "latest_by_date"]
