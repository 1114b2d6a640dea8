"""Per-day habit status projections for calendar widgets."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Hashable, Iterable, Optional

from .entries import CompletionEntry, latest_by_date
from .frequency import Frequency, FrequencyLike, day_of_week, should_track_on_date


class DayStatus(str, Enum):
    COMPLETED = "completed"
    MISSED = "missed"
    EXPECTED_MISSED = "expected-missed"
    NO_ENTRY = "no-entry"


@dataclass(frozen=True, slots=True)
class CalendarDay:
    """One day of a habit calendar."""

    date: date
    day_of_month: int
    day_of_week: int  # 0=Sunday .. 6=Saturday
    status: DayStatus
    reason: Optional[str] = None
    is_expected_day: bool = True


def _day_status(
    entry: Optional[CompletionEntry], is_expected: bool, day: date, today: date
) -> DayStatus:
    if entry is not None:
        return DayStatus.COMPLETED if entry.completed else DayStatus.MISSED
    if is_expected and day < today:
        return DayStatus.EXPECTED_MISSED
    return DayStatus.NO_ENTRY


def build_month_view(
    habit_id: Hashable,
    entries: Iterable[CompletionEntry],
    year: int,
    month: int,
    start_date: date,
    frequency: FrequencyLike,
    today: date,
) -> list[CalendarDay]:
    """Return one ``CalendarDay`` per day of ``year``/``month`` in order.

    Only past expected days without an entry are flagged as expected-missed;
    ``today`` itself is still open.
    """

    rule = Frequency.parse(frequency)
    latest = latest_by_date(entries, habit_id)
    _, days_in_month = calendar.monthrange(year, month)

    days: list[CalendarDay] = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        entry = latest.get(day)
        is_expected = should_track_on_date(start_date, rule, day)
        days.append(
            CalendarDay(
                date=day,
                day_of_month=day_number,
                day_of_week=day_of_week(day),
                status=_day_status(entry, is_expected, day, today),
                reason=entry.reason if entry is not None and entry.reason else None,
                is_expected_day=is_expected,
            )
        )
    return days


def build_recent_days(
    habit_id: Hashable,
    entries: Iterable[CompletionEntry],
    today: date,
    days: int = 30,
) -> list[CalendarDay]:
    """Trailing ``days`` window ending at ``today``, oldest first.

    Without a frequency every day counts as expected, so a day with no entry
    is reported as ``no-entry`` rather than expected-missed.
    """

    latest = latest_by_date(entries, habit_id)
    result: list[CalendarDay] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        entry = latest.get(day)
        if entry is None:
            status = DayStatus.NO_ENTRY
        else:
            status = DayStatus.COMPLETED if entry.completed else DayStatus.MISSED
        result.append(
            CalendarDay(
                date=day,
                day_of_month=day.day,
                day_of_week=day_of_week(day),
                status=status,
                reason=entry.reason if entry is not None and entry.reason else None,
            )
        )
    return result


__all__ = ["CalendarDay", "DayStatus", "build_month_view", "build_recent_days"]
