# tests/test_period.py
"""
Unit tests for semi-monthly period aggregation and statutory deductions.
"""

import datetime
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from nightpay.core.earnings import (
    annual_withholding_tax,
    build_period_view,
    daily_earnings,
    deduction_breakdown,
    health_insurance_contribution,
    housing_fund_contribution,
    period_weekdays,
    semi_monthly_deductions,
    weekday_projection,
    weekend_earnings,
)
from nightpay.core.models import CompensationConfig, DaySource, WeekendShiftEntry

HOURLY = 28_000 / (26 * 8)
SATURDAY = datetime.date(2026, 10, 17)
MONDAY = datetime.date(2026, 10, 19)


class TestDailyEarnings:
    def test_projection_for_weekday(self, compensation):
        # October 2026 has 11 weekdays in each period
        assert period_weekdays(1, 2026, 10) == 11
        expected = 14_000 / 11 + HOURLY * 0.18 * 8

        assert weekday_projection(11, compensation) == pytest.approx(expected)
        assert daily_earnings(MONDAY, 11, {}, {}, compensation) == (
            pytest.approx(expected),
            DaySource.PROJECTED,
        )

    def test_projection_without_weekdays(self, compensation):
        assert weekday_projection(0, compensation) == pytest.approx(HOURLY * 0.18 * 8)

    def test_recorded_value_replaces_projection(self, compensation):
        earnings, source = daily_earnings(MONDAY, 11, {MONDAY: 1_500.0}, {}, compensation)

        assert earnings == 1_500.0
        assert source == DaySource.RECORDED

    def test_weekend_without_entry_is_zero(self, compensation):
        assert daily_earnings(SATURDAY, 11, {}, {}, compensation) == (0.0, DaySource.REST)

    def test_weekend_entry(self, compensation):
        entry = WeekendShiftEntry(hours_worked=8, start_time=datetime.time(22, 0))
        earnings, source = daily_earnings(SATURDAY, 11, {}, {SATURDAY: entry}, compensation)

        assert earnings == pytest.approx(weekend_earnings(entry, compensation))
        assert source == DaySource.WEEKEND_ENTRY


class TestPeriodView:
    def test_first_period_layout(self, compensation):
        view = build_period_view(1, 2026, 10, {}, {}, compensation, today=MONDAY)

        assert view.title == "October 2026"
        assert view.label == "1-15"
        assert view.leading_blanks == 3  # 1 October 2026 is a Thursday
        assert len(view.days) == 15
        assert not any(day.is_today for day in view.days)
        assert (view.prev_year, view.prev_month, view.next_year, view.next_month) == (2026, 9, 2026, 11)

    def test_second_period_marks_today(self, compensation):
        view = build_period_view(2, 2026, 10, {}, {}, compensation, today=MONDAY)

        assert view.label == "16-31"
        assert [day.date for day in view.days if day.is_today] == [MONDAY]

    def test_allowance_only_in_first_period(self, compensation):
        first = build_period_view(1, 2026, 10, {}, {}, compensation)
        second = build_period_view(2, 2026, 10, {}, {}, compensation)
        projection = weekday_projection(11, compensation)

        assert first.allowance == 2_800
        assert second.allowance == 0
        assert first.gross_total == pytest.approx(11 * projection + 2_800)
        assert second.gross_total == pytest.approx(11 * projection)

    def test_net_subtracts_deductions(self, compensation):
        view = build_period_view(2, 2026, 10, {}, {}, compensation)

        assert view.deductions == pytest.approx(1_687.5)
        assert view.period_net_total == pytest.approx(view.gross_total - 1_687.5)

    def test_recorded_shift_changes_total_by_difference(self, compensation):
        projected = build_period_view(2, 2026, 10, {}, {}, compensation)
        recorded = build_period_view(2, 2026, 10, {MONDAY: 2_000.0}, {}, compensation)

        monday = next(day for day in recorded.days if day.date == MONDAY)
        assert monday.is_recorded
        assert recorded.period_net_total - projected.period_net_total == pytest.approx(
            2_000.0 - weekday_projection(11, compensation)
        )

    def test_weekend_entry_adds_exact_amount(self, compensation):
        entry = WeekendShiftEntry(hours_worked=8, start_time=datetime.time(22, 0))
        without = build_period_view(2, 2026, 10, {}, {}, compensation)
        with_entry = build_period_view(2, 2026, 10, {}, {SATURDAY: entry}, compensation)

        saturday = next(day for day in with_entry.days if day.date == SATURDAY)
        assert saturday.is_recorded_weekend
        assert with_entry.period_net_total - without.period_net_total == pytest.approx(
            weekend_earnings(entry, compensation)
        )

    def test_entries_outside_period_are_ignored(self, compensation):
        entry = WeekendShiftEntry(hours_worked=8, start_time=datetime.time(22, 0))
        first = build_period_view(1, 2026, 10, {}, {SATURDAY: entry}, compensation)

        assert first.gross_total == pytest.approx(build_period_view(1, 2026, 10, {}, {}, compensation).gross_total)


class TestDeductions:
    def test_default_semi_monthly_total(self, compensation):
        assert semi_monthly_deductions(compensation) == pytest.approx(1_687.5)

    def test_itemized(self, compensation):
        items = deduction_breakdown(compensation)

        assert items["withholding_tax"] == pytest.approx(537.5)
        assert items["sss"] == pytest.approx(700)
        assert items["philhealth"] == pytest.approx(350)
        assert items["pagibig"] == pytest.approx(100)
        assert items["total"] == pytest.approx(1_687.5)

    def test_no_tax_below_threshold(self):
        assert annual_withholding_tax(CompensationConfig(monthly_salary=20_000)) == 0

    def test_philhealth_floor_and_cap(self):
        assert health_insurance_contribution(CompensationConfig(monthly_salary=5_000)) == 250
        assert health_insurance_contribution(CompensationConfig(monthly_salary=200_000)) == 2_500

    def test_pagibig_cap(self):
        assert housing_fund_contribution(CompensationConfig(monthly_salary=5_000)) == pytest.approx(100)
        assert housing_fund_contribution(CompensationConfig(monthly_salary=28_000)) == 200
