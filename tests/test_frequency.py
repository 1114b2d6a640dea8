"""Tests for frequency rules and expected-day counting."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from habitcadence.domain.frequency import (
    Frequency,
    completion_rate,
    count_expected,
    day_of_week,
    describe_frequency,
    rounded_percent,
    should_track_on_date,
)
from habitcadence.domain.streaks import weekly_counts

MONDAY = date(2024, 1, 1)


def _days(start: date, count: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(count)]


class TestFrequencyParsing:
    """Closed enumeration with a daily fallback."""

    @pytest.mark.parametrize("value", [f.value for f in Frequency])
    def test_known_values_round_trip(self, value):
        assert Frequency.parse(value).value == value

    @pytest.mark.parametrize("value", ["hourly", "", "sometimes", None])
    def test_unknown_values_fall_back_to_daily(self, value):
        assert Frequency.parse(value) is Frequency.DAILY

    @pytest.mark.parametrize("value", ["Weekly", " weekly", "WEEKLY", "Every-Other-Day"])
    def test_matching_is_exact(self, value):
        assert Frequency.parse(value) is Frequency.DAILY
        assert Frequency.is_known(value) is False

    def test_miscased_rule_tracks_as_daily(self):
        # A Tuesday is not a weekly day for a Monday start, but daily tracks it.
        assert should_track_on_date(MONDAY, "weekly", date(2024, 1, 2)) is False
        assert should_track_on_date(MONDAY, "Weekly", date(2024, 1, 2)) is True

    def test_unknown_frequency_tracks_every_day(self):
        start = date(2024, 1, 3)
        assert all(should_track_on_date(start, "fortnightly", d) for d in _days(start, 14))

    def test_descriptions(self):
        assert describe_frequency("weekdays") == "Monday to Friday"
        assert describe_frequency(Frequency.WEEKENDS) == "Saturday and Sunday"
        assert describe_frequency("custom-rule") == "custom-rule"
        assert Frequency.MONTHLY.label == "Monthly"


class TestDayOfWeek:
    def test_sunday_is_zero(self):
        assert day_of_week(date(2024, 1, 7)) == 0
        assert day_of_week(MONDAY) == 1
        assert day_of_week(date(2024, 1, 6)) == 6


class TestShouldTrackOnDate:
    """Rule table for each frequency."""

    @pytest.mark.parametrize("frequency", list(Frequency) + ["unknown"])
    def test_never_tracked_before_start(self, frequency):
        start = date(2024, 3, 15)
        for d in _days(start - timedelta(days=60), 60):
            assert should_track_on_date(start, frequency, d) is False

    def test_daily_always_true_from_start(self):
        assert all(should_track_on_date(MONDAY, "daily", d) for d in _days(MONDAY, 400))

    def test_every_other_day_alternates_from_start(self):
        result = [should_track_on_date(MONDAY, "every-other-day", d) for d in _days(MONDAY, 6)]
        assert result == [True, False, True, False, True, False]

    def test_weekdays(self):
        result = [should_track_on_date(MONDAY, "weekdays", d) for d in _days(MONDAY, 7)]
        assert result == [True, True, True, True, True, False, False]

    def test_weekends(self):
        result = [should_track_on_date(MONDAY, "weekends", d) for d in _days(MONDAY, 7)]
        assert result == [False, False, False, False, False, True, True]

    def test_weekly_matches_start_weekday(self):
        expected = {MONDAY + timedelta(weeks=w) for w in range(8)}
        tracked = {d for d in _days(MONDAY, 56) if should_track_on_date(MONDAY, "weekly", d)}
        assert tracked == expected

    def test_weekly_once_per_aligned_window(self):
        start = date(2024, 2, 14)  # Wednesday
        for week in range(20):
            window = _days(start + timedelta(weeks=week), 7)
            assert sum(should_track_on_date(start, Frequency.WEEKLY, d) for d in window) == 1

    def test_twice_weekly_uses_plus_three_offset(self):
        tracked = [d for d in _days(MONDAY, 7) if should_track_on_date(MONDAY, "twice-weekly", d)]
        assert tracked == [date(2024, 1, 1), date(2024, 1, 4)]

    def test_twice_weekly_offset_wraps_past_saturday(self):
        saturday = date(2024, 1, 6)
        tracked = [d for d in _days(saturday, 7) if should_track_on_date(saturday, "twice-weekly", d)]
        # Saturday (6) and (6 + 3) % 7 == Tuesday (2)
        assert [day_of_week(d) for d in tracked] == [6, 2]

    def test_three_times_weekly_offsets(self):
        tracked = [d for d in _days(MONDAY, 7) if should_track_on_date(MONDAY, "three-times-weekly", d)]
        assert [day_of_week(d) for d in tracked] == [1, 3, 5]

    def test_three_times_weekly_wraps_from_friday(self):
        friday = date(2024, 1, 5)
        tracked = {day_of_week(d) for d in _days(friday, 7) if should_track_on_date(friday, "three-times-weekly", d)}
        assert tracked == {5, 0, 2}

    def test_monthly_matches_day_of_month(self):
        start = date(2024, 1, 15)
        assert should_track_on_date(start, "monthly", date(2024, 2, 15))
        assert should_track_on_date(start, "monthly", date(2025, 6, 15))
        assert not should_track_on_date(start, "monthly", date(2024, 2, 16))

    def test_monthly_on_31st_skips_short_months(self):
        start = date(2024, 1, 31)
        assert not any(should_track_on_date(start, "monthly", d) for d in _days(date(2024, 2, 1), 29))
        assert should_track_on_date(start, "monthly", date(2024, 3, 31))
        assert not should_track_on_date(start, "monthly", date(2024, 2, 29))
        assert not should_track_on_date(start, "monthly", date(2024, 3, 2))

    def test_start_day_itself_is_expected_for_start_anchored_rules(self):
        start = date(2024, 5, 9)
        for rule in ("daily", "every-other-day", "weekly", "twice-weekly", "three-times-weekly", "monthly"):
            assert should_track_on_date(start, rule, start)


class TestCountExpected:
    def test_weekly_in_january(self):
        assert count_expected(MONDAY, "weekly", date(2024, 1, 1), date(2024, 1, 31)) == 5

    def test_weekdays_and_weekends_split_a_week(self):
        assert count_expected(MONDAY, "weekdays", MONDAY, MONDAY + timedelta(days=6)) == 5
        assert count_expected(MONDAY, "weekends", MONDAY, MONDAY + timedelta(days=6)) == 2

    def test_reversed_range_is_zero(self):
        assert count_expected(MONDAY, "daily", date(2024, 2, 1), date(2024, 1, 1)) == 0

    def test_single_day_range(self):
        assert count_expected(MONDAY, "daily", MONDAY, MONDAY) == 1

    def test_days_before_start_not_counted(self):
        start = date(2024, 1, 10)
        assert count_expected(start, "daily", date(2024, 1, 1), date(2024, 1, 15)) == 6

    def test_monthly_short_month_counts_zero(self):
        assert count_expected(date(2024, 1, 31), "monthly", date(2024, 2, 1), date(2024, 2, 29)) == 0

    @pytest.mark.parametrize("frequency", list(Frequency))
    @pytest.mark.parametrize("offset", [0, 3, 6, 10, 45])
    def test_agrees_with_weekly_window(self, frequency, offset):
        """The generic counter and the trailing-week loop are separate paths."""
        start = date(2024, 1, 3)
        today = start + timedelta(days=offset)
        expected_week, _ = weekly_counts(start, frequency, set(), today)
        assert count_expected(start, frequency, today - timedelta(days=6), today) == expected_week


class TestCompletionRate:
    def test_rate_over_range(self):
        assert completion_rate(MONDAY, "weekly", date(2024, 1, 1), date(2024, 1, 31), 4) == 80

    def test_rate_capped_at_100(self):
        assert completion_rate(MONDAY, "weekly", date(2024, 1, 1), date(2024, 1, 31), 7) == 100

    def test_zero_expected_gives_zero(self):
        assert completion_rate(date(2024, 1, 31), "monthly", date(2024, 2, 1), date(2024, 2, 29), 3) == 0

    def test_rounds_half_up(self):
        assert rounded_percent(1, 8) == 13
        assert rounded_percent(2, 3) == 67
        assert rounded_percent(1, 3) == 33
        assert rounded_percent(0, 0) == 0
