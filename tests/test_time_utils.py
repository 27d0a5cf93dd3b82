# tests/test_time_utils.py
"""
Unit tests for shift windows, pay periods and start time parsing.
"""

import datetime
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from nightpay.core.helpers import format_duration, format_money
from nightpay.core.time_utils import (
    LOCAL_TZ,
    enumerate_period_dates,
    hours_between,
    is_rest_day,
    parse_start_time,
    period_bounds,
    shift_window_start,
    to_local,
    weekday_count,
)
from nightpay.core.utils import get_month_navigation


def at(month, day, hour, minute=0):
    return datetime.datetime(2026, month, day, hour, minute, tzinfo=LOCAL_TZ)


class TestShiftWindow:
    """Shift instance selection around the 08:00 rollover."""

    def test_evening_belongs_to_same_day(self):
        assert shift_window_start(at(10, 19, 23)) == at(10, 19, 22)

    def test_early_morning_belongs_to_previous_day(self):
        assert shift_window_start(at(10, 20, 7, 59)) == at(10, 19, 22)

    def test_rollover_at_eight(self):
        assert shift_window_start(at(10, 20, 8)) == at(10, 20, 22)

    def test_daytime_points_to_upcoming_shift(self):
        assert shift_window_start(at(10, 20, 12)) == at(10, 20, 22)

    def test_month_boundary(self):
        assert shift_window_start(at(11, 1, 3)) == at(10, 31, 22)

    def test_utc_instant_is_converted_to_local(self):
        # 14:30 UTC is 22:30 in Manila (UTC+8)
        instant = datetime.datetime(2026, 10, 19, 14, 30, tzinfo=datetime.timezone.utc)
        assert shift_window_start(instant) == at(10, 19, 22)

    def test_naive_datetime_is_local(self):
        naive = datetime.datetime(2026, 10, 19, 23, 0)
        assert to_local(naive) == at(10, 19, 23)


class TestPayPeriods:
    def test_rest_days(self):
        assert is_rest_day(datetime.date(2026, 10, 17))  # Saturday
        assert is_rest_day(datetime.date(2026, 10, 18))  # Sunday
        assert not is_rest_day(datetime.date(2026, 10, 19))  # Monday
        assert not is_rest_day(datetime.date(2026, 10, 23))  # Friday

    def test_period_bounds(self):
        assert period_bounds(1, 2026, 2) == (datetime.date(2026, 2, 1), datetime.date(2026, 2, 15))
        assert period_bounds(2, 2026, 2) == (datetime.date(2026, 2, 16), datetime.date(2026, 2, 28))
        assert period_bounds(2, 2028, 2) == (datetime.date(2028, 2, 16), datetime.date(2028, 2, 29))
        assert period_bounds(2, 2026, 10)[1] == datetime.date(2026, 10, 31)

    def test_invalid_period_raises(self):
        with pytest.raises(ValueError):
            period_bounds(3, 2026, 10)

    def test_enumerate_period_dates(self):
        first = enumerate_period_dates(1, 2026, 10)
        second = enumerate_period_dates(2, 2026, 10)

        assert len(first) == 15
        assert len(second) == 16
        assert first[0] == datetime.date(2026, 10, 1)
        assert second[-1] == datetime.date(2026, 10, 31)
        assert first == sorted(first)

    def test_weekday_count_month_starting_on_monday(self):
        # June 2026 starts on a Monday
        first, last = period_bounds(1, 2026, 6)
        assert weekday_count(first, last) == 11

    def test_weekday_count_is_inclusive(self):
        monday = datetime.date(2026, 10, 19)
        assert weekday_count(monday, monday) == 1
        assert weekday_count(monday, monday + datetime.timedelta(days=6)) == 5


class TestParseStartTime:
    def test_parses_hh_mm(self):
        assert parse_start_time("22:00") == datetime.time(22, 0)
        assert parse_start_time(" 07:30 ") == datetime.time(7, 30)

    def test_accepts_time_objects(self):
        assert parse_start_time(datetime.time(22, 0, 15)) == datetime.time(22, 0)

    @pytest.mark.parametrize("value", ["", "25:00", "10pm", "22-00"])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            parse_start_time(value)

    def test_rejects_other_types(self):
        with pytest.raises(ValueError):
            parse_start_time(22)


class TestHelpers:
    def test_hours_between_never_negative(self):
        assert hours_between(at(10, 19, 22), at(10, 20, 1, 30)) == 3.5
        assert hours_between(at(10, 20, 1), at(10, 19, 22)) == 0.0

    def test_month_navigation_wraps_year(self):
        assert get_month_navigation(2026, 1) == {
            "prev_year": 2025,
            "prev_month": 12,
            "next_year": 2026,
            "next_month": 2,
        }
        nav = get_month_navigation(2026, 12)
        assert (nav["next_year"], nav["next_month"]) == (2027, 1)

    def test_format_money(self):
        assert format_money(1234.5) == "₱1,234.50"
        assert format_money(-20) == "-₱20.00"
        assert format_money(None) == ""

    def test_format_duration(self):
        assert format_duration(1.5) == "1h 30m 0s"
        assert format_duration(-2) == "0h 0m 0s"
