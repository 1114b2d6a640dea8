"""Frequency rules: which calendar days a habit is expected on."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Union


class Frequency(str, Enum):
    """Closed set of schedule patterns a habit can follow."""

    DAILY = "daily"
    EVERY_OTHER_DAY = "every-other-day"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    WEEKLY = "weekly"
    TWICE_WEEKLY = "twice-weekly"
    THREE_TIMES_WEEKLY = "three-times-weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: Union["Frequency", str, None]) -> "Frequency":
        """Return the matching rule; anything unrecognised behaves as daily.

        Matching is exact: ``"Weekly"`` is not ``"weekly"`` and falls back.
        """

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.DAILY

    @classmethod
    def is_known(cls, value: object) -> bool:
        if isinstance(value, cls):
            return True
        return value in {member.value for member in cls}

    @property
    def label(self) -> str:
        return FREQUENCY_OPTIONS[self].label

    @property
    def description(self) -> str:
        return FREQUENCY_OPTIONS[self].description


@dataclass(frozen=True, slots=True)
class FrequencyOption:
    """Display text for a frequency rule."""

    label: str
    description: str


FREQUENCY_OPTIONS: dict[Frequency, FrequencyOption] = {
    Frequency.DAILY: FrequencyOption("Daily", "Every day"),
    Frequency.EVERY_OTHER_DAY: FrequencyOption("Every other day", "Day 1, day 3, day 5 and so on"),
    Frequency.WEEKDAYS: FrequencyOption("Weekdays", "Monday to Friday"),
    Frequency.WEEKENDS: FrequencyOption("Weekends", "Saturday and Sunday"),
    Frequency.WEEKLY: FrequencyOption("Once a week", "Once every week"),
    Frequency.TWICE_WEEKLY: FrequencyOption("Twice a week", "Two times every week"),
    Frequency.THREE_TIMES_WEEKLY: FrequencyOption("Three times a week", "Three times every week"),
    Frequency.MONTHLY: FrequencyOption("Monthly", "Once a month"),
}

FrequencyLike = Union[Frequency, str]


def describe_frequency(value: FrequencyLike) -> str:
    """Human-readable description; unknown strings describe as themselves."""

    if isinstance(value, Frequency):
        return value.description
    if Frequency.is_known(value):
        return Frequency.parse(value).description
    return value


def day_of_week(day: date) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""

    return day.isoweekday() % 7


def should_track_on_date(start_date: date, frequency: FrequencyLike, candidate: date) -> bool:
    """Return True when the habit is expected on ``candidate``.

    Dates before ``start_date`` are never expected. The twice- and
    three-times-weekly rules use fixed offsets from the start weekday
    (+3, and +2/+4 respectively), wrapping modulo 7.
    """

    if candidate < start_date:
        return False

    rule = Frequency.parse(frequency)
    weekday = day_of_week(candidate)
    start_weekday = day_of_week(start_date)

    if rule is Frequency.DAILY:
        return True
    if rule is Frequency.EVERY_OTHER_DAY:
        return (candidate - start_date).days % 2 == 0
    if rule is Frequency.WEEKDAYS:
        return 1 <= weekday <= 5
    if rule is Frequency.WEEKENDS:
        return weekday in (0, 6)
    if rule is Frequency.WEEKLY:
        return weekday == start_weekday
    if rule is Frequency.TWICE_WEEKLY:
        return weekday in (start_weekday, (start_weekday + 3) % 7)
    if rule is Frequency.THREE_TIMES_WEEKLY:
        return weekday in (start_weekday, (start_weekday + 2) % 7, (start_weekday + 4) % 7)
    # MONTHLY: a start day missing from a short month is never matched there.
    return candidate.day == start_date.day


def count_expected(
    start_date: date, frequency: FrequencyLike, from_date: date, to_date: date
) -> int:
    """Count expected days between ``from_date`` and ``to_date`` inclusive."""

    rule = Frequency.parse(frequency)
    count = 0
    cursor = from_date
    while cursor <= to_date:
        if should_track_on_date(start_date, rule, cursor):
            count += 1
        cursor += timedelta(days=1)
    return count


def rounded_percent(part: int, whole: int) -> int:
    """Round ``part / whole * 100`` half-up; 0 when ``whole`` is 0."""

    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def completion_rate(
    start_date: date,
    frequency: FrequencyLike,
    from_date: date,
    to_date: date,
    actual_completions: int,
) -> int:
    """Percentage of expected days completed over a range, capped at 100."""

    expected = count_expected(start_date, frequency, from_date, to_date)
    if expected == 0:
        return 0
    return min(100, rounded_percent(actual_completions, expected))


__all__ = [
    "FREQUENCY_OPTIONS",
    "Frequency",
    "FrequencyLike",
    "FrequencyOption",
    "completion_rate",
    "count_expected",
    "day_of_week",
    "describe_frequency",
    "rounded_percent",
    "should_track_on_date",
]
