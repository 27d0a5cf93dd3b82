"""
Earnings module - rates, night differential, shift accounting and period totals.

Exports every public function of the submodules.
"""

from .deductions import (
    annual_withholding_tax,
    deduction_breakdown,
    health_insurance_contribution,
    housing_fund_contribution,
    semi_monthly_deductions,
    social_insurance_contribution,
)
from .night import night_overlap_hours, night_overlap_minutes
from .period import build_period_view, daily_earnings, period_weekdays, weekday_projection
from .rates import base_rate_earnings, hourly_rate, night_earnings, overtime_earnings, overtime_rate
from .shift import (
    SCHEDULED_START_TIME,
    ShiftTracker,
    compute_breakdown,
    weekend_breakdown,
    weekend_earnings,
)

__all__ = [
    # rates
    "hourly_rate",
    "base_rate_earnings",
    "overtime_rate",
    "overtime_earnings",
    "night_earnings",
    # night
    "night_overlap_hours",
    "night_overlap_minutes",
    # shift
    "SCHEDULED_START_TIME",
    "ShiftTracker",
    "compute_breakdown",
    "weekend_breakdown",
    "weekend_earnings",
    # period
    "build_period_view",
    "daily_earnings",
    "period_weekdays",
    "weekday_projection",
    # deductions
    "annual_withholding_tax",
    "social_insurance_contribution",
    "health_insurance_contribution",
    "housing_fund_contribution",
    "deduction_breakdown",
    "semi_monthly_deductions",
]
