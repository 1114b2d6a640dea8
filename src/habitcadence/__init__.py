"""HabitCadence: frequency-aware habit streaks and calendar views."""

from __future__ import annotations

from .config import BaseConfig, TestingConfig
from .domain import (
    CalendarDay,
    CompletionEntry,
    DayStatus,
    Frequency,
    StreakInfo,
    build_month_view,
    calculate_streak_info,
    count_expected,
    should_track_on_date,
)

__version__ = "0.1.0"

__all__ = [
    "BaseConfig",
    "CalendarDay",
    "CompletionEntry",
    "DayStatus",
    "Frequency",
    "StreakInfo",
    "TestingConfig",
    "build_month_view",
    "calculate_streak_info",
    "count_expected",
    "should_track_on_date",
]
