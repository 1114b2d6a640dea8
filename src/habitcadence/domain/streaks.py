"""Frequency-aware streak and weekly statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Hashable, Iterable, Optional

from ..logging_config import get_logger
from .entries import CompletionEntry, completed_dates
from .frequency import FrequencyLike, Frequency, rounded_percent, should_track_on_date

logger = get_logger("domain.streaks")

# How far back to look for the most recent expected day when today is not one.
ANCHOR_LOOKBACK_DAYS = 30
WEEK_WINDOW_DAYS = 7


@dataclass(frozen=True, slots=True)
class StreakInfo:
    """Streak summary for one habit as of a given day."""

    current_streak: int = 0
    longest_streak: int = 0
    last_completion_date: Optional[date] = None
    expected_this_week: int = 0
    completed_this_week: int = 0
    completion_rate: int = 0


def _anchor_date(
    start_date: date, rule: Frequency, done: set[date], today: date
) -> date:
    """Day the current-streak walk starts from."""

    if today in done:
        return today
    if should_track_on_date(start_date, rule, today):
        # Today is still open; the streak is judged from yesterday backwards.
        return today - timedelta(days=1)
    for days_back in range(1, ANCHOR_LOOKBACK_DAYS + 1):
        candidate = today - timedelta(days=days_back)
        if should_track_on_date(start_date, rule, candidate):
            return candidate
    return today


def current_streak(start_date: date, frequency: FrequencyLike, done: set[date], today: date) -> int:
    """Consecutive completed expected days ending at the anchor day."""

    rule = Frequency.parse(frequency)
    cursor = _anchor_date(start_date, rule, done, today)
    streak = 0
    while cursor >= start_date:
        if should_track_on_date(start_date, rule, cursor):
            if cursor not in done:
                break
            streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(start_date: date, frequency: FrequencyLike, done: set[date], today: date) -> int:
    """Longest run of completed expected days from ``start_date`` to ``today``."""

    rule = Frequency.parse(frequency)
    longest = 0
    run = 0
    cursor = start_date
    while cursor <= today:
        if should_track_on_date(start_date, rule, cursor):
            if cursor in done:
                run += 1
                longest = max(longest, run)
            else:
                run = 0
        cursor += timedelta(days=1)
    return longest


def weekly_counts(
    start_date: date, frequency: FrequencyLike, done: set[date], today: date
) -> tuple[int, int]:
    """Return (expected, completed) over the 7 days ending at ``today``."""

    rule = Frequency.parse(frequency)
    expected = 0
    completed = 0
    for i in range(WEEK_WINDOW_DAYS):
        day = today - timedelta(days=i)
        if should_track_on_date(start_date, rule, day):
            expected += 1
            if day in done:
                completed += 1
    return expected, completed


def calculate_streak_info(
    habit_id: Hashable,
    entries: Iterable[CompletionEntry],
    start_date: date,
    frequency: FrequencyLike,
    today: date,
) -> StreakInfo:
    """Compute streaks and trailing-week stats for ``habit_id`` as of ``today``.

    Entries for other habits are ignored. When a date has several entries the
    newest one decides whether it counts as completed.
    """

    rule = Frequency.parse(frequency)
    dates = completed_dates(entries, habit_id)
    done = set(dates)

    expected_week, completed_week = weekly_counts(start_date, rule, done, today)
    if not dates:
        return StreakInfo(expected_this_week=expected_week)

    info = StreakInfo(
        current_streak=current_streak(start_date, rule, done, today),
        longest_streak=longest_streak(start_date, rule, done, today),
        last_completion_date=dates[-1],
        expected_this_week=expected_week,
        completed_this_week=completed_week,
        completion_rate=rounded_percent(completed_week, expected_week),
    )
    logger.debug(
        "Streak info computed",
        extra={"habit_id": habit_id, "frequency": rule.value, "current": info.current_streak},
    )
    return info


__all__ = [
    "ANCHOR_LOOKBACK_DAYS",
    "StreakInfo",
    "calculate_streak_info",
    "current_streak",
    "longest_streak",
    "weekly_counts",
]
