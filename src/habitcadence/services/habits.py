"""Habit service: feeds stored habits and entries through the scheduling engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..config import BaseConfig
from ..domain.calendar import CalendarDay, build_month_view, build_recent_days
from ..domain.entries import completed_dates
from ..domain.frequency import Frequency, FrequencyLike, completion_rate, count_expected
from ..domain.repositories.habit import HabitRepository
from ..domain.streaks import StreakInfo, calculate_streak_info
from ..infra.repositories.habit import to_completion_entries
from ..logging_config import get_logger
from ..models.habit import Habit, HabitEntry

logger = get_logger("services.habits")


def resolve_today(tz: Union[str, tzinfo]) -> date:
    """Return the current calendar date in ``tz`` (a zone name or tzinfo)."""

    zone = ZoneInfo(tz) if isinstance(tz, str) else tz
    return datetime.now(zone).date()


@dataclass(frozen=True, slots=True)
class HabitStatistics:
    """Lifetime summary for a habit."""

    habit_id: int
    habit_name: str
    current_streak: int
    longest_streak: int
    total_completed_days: int
    total_days_since_start: int
    total_expected_days: int
    completion_rate: int
    start_date: date
    last_completed_date: Optional[date]


class HabitTracker:
    """Application-facing operations over a habit repository.

    ``today`` may be passed explicitly to every read; when omitted it is
    resolved once here in the configured timezone.
    """

    def __init__(self, repository: HabitRepository, config: BaseConfig | None = None):
        self.repository = repository
        self.config = config or BaseConfig()

    def _today(self, today: Optional[date]) -> date:
        return today if today is not None else resolve_today(self.config.tzinfo)

    def _require(self, habit_id: int) -> Habit:
        habit = self.repository.get_by_id(habit_id)
        if habit is None:
            logger.warning("Unknown habit requested", extra={"habit_id": habit_id})
            raise LookupError(f"Habit {habit_id} does not exist")
        return habit

    def add_habit(
        self,
        name: str,
        start_date: date,
        frequency: FrequencyLike = Frequency.DAILY,
        description: str = "",
    ) -> Habit:
        """Create a habit; unknown frequencies are stored as daily."""

        name = (name or "").strip()
        if not name:
            raise ValueError("Habit name is required")

        if not isinstance(frequency, Frequency) and not Frequency.is_known(frequency):
            logger.warning(
                "Unknown frequency, falling back to daily",
                extra={"frequency": frequency, "habit_name": name},
            )
        rule = Frequency.parse(frequency)

        habit = Habit(
            name=name,
            description=(description or "").strip(),
            frequency=rule.value,
            start_date=start_date,
        )
        created = self.repository.create(habit)
        logger.info(
            "Habit created",
            extra={"habit_id": created.id, "frequency": rule.value, "start_date": start_date},
        )
        return created

    def _record(self, habit_id: int, on: date, completed: bool, reason: Optional[str]) -> HabitEntry:
        self._require(habit_id)
        entry = self.repository.upsert_entry(
            HabitEntry(habit_id=habit_id, occurred_on=on, completed=completed, reason=reason)
        )
        logger.info(
            "Habit entry recorded",
            extra={"habit_id": habit_id, "occurred_on": on, "completed": completed},
        )
        return entry

    def mark_completed(self, habit_id: int, on: date) -> HabitEntry:
        return self._record(habit_id, on, True, None)

    def mark_missed(self, habit_id: int, on: date, reason: Optional[str] = None) -> HabitEntry:
        return self._record(habit_id, on, False, reason)

    def is_completed_on(self, habit_id: int, on: date) -> bool:
        entry = self.repository.get_entry(habit_id, on)
        return bool(entry and entry.completed)

    def streak_info(self, habit_id: int, today: Optional[date] = None) -> StreakInfo:
        habit = self._require(habit_id)
        entries = to_completion_entries(self.repository.list_entries(habit_id))
        return calculate_streak_info(
            habit_id, entries, habit.start_date, habit.rule, self._today(today)
        )

    def month_view(
        self, habit_id: int, year: int, month: int, today: Optional[date] = None
    ) -> list[CalendarDay]:
        habit = self._require(habit_id)
        entries = to_completion_entries(self.repository.list_entries(habit_id))
        return build_month_view(
            habit_id, entries, year, month, habit.start_date, habit.rule, self._today(today)
        )

    def recent_days(self, habit_id: int, today: Optional[date] = None) -> list[CalendarDay]:
        """Trailing history strip sized by ``RECENT_DAYS``."""
        self._require(habit_id)
        entries = to_completion_entries(self.repository.list_entries(habit_id))
        return build_recent_days(habit_id, entries, self._today(today), self.config.RECENT_DAYS)

    def statistics(self, habit_id: int, today: Optional[date] = None) -> HabitStatistics:
        """Lifetime statistics from ``start_date`` through ``today``."""

        habit = self._require(habit_id)
        today = self._today(today)
        entries = to_completion_entries(self.repository.list_entries(habit_id))
        info = calculate_streak_info(habit_id, entries, habit.start_date, habit.rule, today)

        # Completions after today or before the start are not part of the history.
        done = [
            day for day in completed_dates(entries, habit_id) if habit.start_date <= day <= today
        ]
        expected = count_expected(habit.start_date, habit.rule, habit.start_date, today)
        return HabitStatistics(
            habit_id=habit_id,
            habit_name=habit.name,
            current_streak=info.current_streak,
            longest_streak=info.longest_streak,
            total_completed_days=len(done),
            total_days_since_start=max(0, (today - habit.start_date).days + 1),
            total_expected_days=expected,
            completion_rate=completion_rate(
                habit.start_date, habit.rule, habit.start_date, today, len(done)
            ),
            start_date=habit.start_date,
            last_completed_date=info.last_completion_date,
        )


__all__ = ["HabitStatistics", "HabitTracker", "resolve_today"]
