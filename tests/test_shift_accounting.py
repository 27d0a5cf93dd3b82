# tests/test_shift_accounting.py
"""
Unit tests for rates, shift breakdowns and the shift state machine.
"""

import datetime
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from nightpay.core.earnings import (
    ShiftTracker,
    base_rate_earnings,
    compute_breakdown,
    hourly_rate,
    overtime_rate,
    weekend_breakdown,
    weekend_earnings,
)
from nightpay.core.models import CompensationConfig, ShiftState, WeekendShiftEntry
from nightpay.core.time_utils import LOCAL_TZ

HOURLY = 28_000 / (26 * 8)

MONDAY_SHIFT = datetime.datetime(2026, 10, 19, 22, 0, tzinfo=LOCAL_TZ)
SATURDAY_SHIFT = datetime.datetime(2026, 10, 17, 22, 0, tzinfo=LOCAL_TZ)


def after(start, hours):
    return start + datetime.timedelta(hours=hours)


class TestRates:
    def test_hourly_rate(self, compensation):
        assert hourly_rate(compensation) == pytest.approx(HOURLY)

    def test_hourly_rate_with_zero_divisor(self):
        assert hourly_rate(CompensationConfig(working_days_per_month=0)) == 0.0

    def test_weekday_base(self, compensation):
        assert base_rate_earnings(8, False, compensation) == pytest.approx(HOURLY * 8)

    def test_rest_day_tiers(self, compensation):
        assert base_rate_earnings(8, True, compensation) == pytest.approx(HOURLY * 1.30 * 8)
        assert base_rate_earnings(10, True, compensation) == pytest.approx(HOURLY * (1.30 * 8 + 1.69 * 2))

    def test_overtime_rates(self, compensation):
        assert overtime_rate(False, compensation) == pytest.approx(HOURLY * 1.25)
        assert overtime_rate(True, compensation) == pytest.approx(HOURLY * 1.69)


class TestComputeBreakdown:
    def test_scheduled_shift_has_no_overtime(self, compensation):
        breakdown = compute_breakdown(9, False, compensation)

        assert breakdown.overtime_hours == 0
        assert breakdown.overtime_earnings == 0
        assert breakdown.night_hours == pytest.approx(8)
        assert breakdown.base_earnings == pytest.approx(HOURLY * 9)
        assert breakdown.night_earnings == pytest.approx(HOURLY * 0.18 * 8)

    def test_grace_period_absorbs_first_fifteen_minutes(self, compensation):
        assert compute_breakdown(9.25, False, compensation).overtime_hours == 0

    def test_overtime_after_grace_period(self, compensation):
        breakdown = compute_breakdown(9.5, False, compensation)

        assert breakdown.base_hours == pytest.approx(9.25)
        assert breakdown.overtime_hours == pytest.approx(0.25)
        assert breakdown.overtime_earnings == pytest.approx(HOURLY * 1.25 * 0.25)

    def test_rest_day_shift(self, compensation):
        breakdown = compute_breakdown(10, True, compensation)

        assert breakdown.base_earnings == pytest.approx(HOURLY * (1.30 * 8 + 1.69 * 1.25))
        assert breakdown.overtime_earnings == pytest.approx(HOURLY * 1.69 * 0.75)

    def test_total_is_sum_of_components(self, compensation):
        breakdown = compute_breakdown(11, False, compensation)
        assert breakdown.total_earnings == pytest.approx(
            breakdown.base_earnings + breakdown.night_earnings + breakdown.overtime_earnings
        )

    def test_negative_hours_are_zero(self, compensation):
        assert compute_breakdown(-1, False, compensation).total_earnings == 0


class TestWeekendEarnings:
    def test_eight_hours_from_22(self, compensation):
        entry = WeekendShiftEntry(hours_worked=8, start_time=datetime.time(22, 0))
        breakdown = weekend_breakdown(entry, compensation)

        assert breakdown.base_earnings == pytest.approx(HOURLY * 1.30 * 8)
        assert breakdown.night_earnings == pytest.approx(HOURLY * 0.18 * 8)
        assert weekend_earnings(entry, compensation) == pytest.approx(HOURLY * 1.48 * 8)

    def test_daytime_weekend_shift(self, compensation):
        entry = WeekendShiftEntry(hours_worked=10, start_time=datetime.time(10, 0))
        breakdown = weekend_breakdown(entry, compensation)

        assert breakdown.night_hours == 0
        assert breakdown.total_earnings == pytest.approx(HOURLY * (1.30 * 8 + 1.69 * 2))

    def test_entry_requires_positive_hours(self):
        with pytest.raises(ValueError):
            WeekendShiftEntry(hours_worked=0, start_time=datetime.time(22, 0))


class TestShiftTracker:
    def test_running_shift_deducts_break(self, compensation):
        tracker = ShiftTracker(MONDAY_SHIFT, compensation)

        assert tracker.state == ShiftState.RUNNING
        assert tracker.shift_date == datetime.date(2026, 10, 19)
        assert tracker.paid_hours(after(MONDAY_SHIFT, 0.5)) == 0
        assert tracker.paid_hours(after(MONDAY_SHIFT, 5)) == pytest.approx(4)

    def test_end_freezes_elapsed_time(self, compensation):
        tracker = ShiftTracker(MONDAY_SHIFT, compensation)
        breakdown = tracker.end(after(MONDAY_SHIFT, 5))

        assert tracker.state == ShiftState.ENDED
        assert breakdown.paid_hours == pytest.approx(4)
        assert tracker.paid_hours(after(MONDAY_SHIFT, 9)) == pytest.approx(4)

    def test_end_twice_is_noop(self, compensation):
        tracker = ShiftTracker(MONDAY_SHIFT, compensation)
        tracker.end(after(MONDAY_SHIFT, 5))

        assert tracker.end(after(MONDAY_SHIFT, 6)) is None
        assert tracker.state == ShiftState.ENDED

    def test_auto_finalize_waits_for_grace_period(self, compensation):
        tracker = ShiftTracker(MONDAY_SHIFT, compensation)

        assert tracker.auto_finalize(after(MONDAY_SHIFT, 10)) is None
        assert tracker.state == ShiftState.RUNNING

    def test_auto_finalize_fires_once(self, compensation):
        tracker = ShiftTracker(MONDAY_SHIFT, compensation)

        breakdown = tracker.auto_finalize(after(MONDAY_SHIFT, 10.25))
        assert breakdown is not None
        assert breakdown.overtime_hours == 0
        assert tracker.state == ShiftState.AUTO_FINALIZED

        assert tracker.auto_finalize(after(MONDAY_SHIFT, 11)) is None
        assert tracker.end(after(MONDAY_SHIFT, 11)) is None

    def test_rest_day_shift_is_not_auto_finalized(self, compensation):
        tracker = ShiftTracker(SATURDAY_SHIFT, compensation)

        assert tracker.is_rest_day
        assert tracker.auto_finalize(after(SATURDAY_SHIFT, 12)) is None
        assert tracker.is_running

    def test_has_started(self, compensation):
        tracker = ShiftTracker(MONDAY_SHIFT, compensation)

        assert not tracker.has_started(after(MONDAY_SHIFT, -1))
        assert tracker.has_started(MONDAY_SHIFT)
