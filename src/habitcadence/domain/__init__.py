"""Pure habit scheduling engine: frequency rules, streaks, calendar views."""

from .calendar import CalendarDay, DayStatus, build_month_view, build_recent_days
from .entries import CompletionEntry, completed_dates, latest_by_date
from .frequency import (
    FREQUENCY_OPTIONS,
    Frequency,
    completion_rate,
    count_expected,
    day_of_week,
    describe_frequency,
    should_track_on_date,
)
from .streaks import StreakInfo, calculate_streak_info

__all__ = [
    "FREQUENCY_OPTIONS",
    "CalendarDay",
    "CompletionEntry",
    "DayStatus",
    "Frequency",
    "StreakInfo",
    "build_month_view",
    "build_recent_days",
    "calculate_streak_info",
    "completed_dates",
    "completion_rate",
    "count_expected",
    "day_of_week",
    "describe_frequency",
    "latest_by_date",
    "should_track_on_date",
]
