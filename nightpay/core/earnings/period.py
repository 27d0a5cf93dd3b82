"""Semi-monthly period aggregation."""

import datetime

from nightpay.core.config import MONTH_TITLE_FORMAT
from nightpay.core.models import CompensationConfig, DayEarnings, DaySource, PeriodView
from nightpay.core.time_utils import enumerate_period_dates, is_rest_day, period_bounds, weekday_count
from nightpay.core.types import RecordedShifts, WeekendEntries
from nightpay.core.utils import get_month_navigation

from .deductions import semi_monthly_deductions
from .night import night_overlap_hours
from .rates import night_earnings
from .shift import SCHEDULED_START_TIME, weekend_earnings


def period_weekdays(period: int, year: int, month: int) -> int:
    """Number of weekdays the half-monthly salary is spread over."""
    first, last = period_bounds(period, year, month)
    return weekday_count(first, last)


def weekday_projection(weekdays: int, config: CompensationConfig) -> float:
    """
    Projected earnings of a weekday without a recorded shift.

    Formula: (monthly_salary / 2) / weekdays + night pay for a full standard shift.
    """
    base = (config.monthly_salary / 2) / weekdays if weekdays > 0 else 0.0
    night_hours = night_overlap_hours(min(config.paid_shift_hours, config.night_hours_cap), SCHEDULED_START_TIME, config)
    return base + night_earnings(night_hours, config)


def daily_earnings(
    day: datetime.date,
    weekdays: int,
    recorded: RecordedShifts,
    weekend_entries: WeekendEntries,
    config: CompensationConfig,
) -> tuple[float, DaySource]:
    """
    Earnings for one calendar date and where they come from.

    Args:
        day: Date
        weekdays: Weekday count of the date's period
        recorded: Finalized weekday shift totals
        weekend_entries: Manually entered weekend shifts
        config: Compensation rules

    Returns:
        (earnings, source)
    """
    if is_rest_day(day):
        entry = weekend_entries.get(day)
        if entry is None:
            return 0.0, DaySource.REST
        return weekend_earnings(entry, config), DaySource.WEEKEND_ENTRY

    if day in recorded:
        return recorded[day], DaySource.RECORDED

    return weekday_projection(weekdays, config), DaySource.PROJECTED


def build_period_view(
    period: int,
    year: int,
    month: int,
    recorded: RecordedShifts,
    weekend_entries: WeekendEntries,
    config: CompensationConfig,
    today: datetime.date | None = None,
) -> PeriodView:
    """
    Build one payroll calendar with per-day earnings and the period net total.

    Gross = sum of daily earnings (+ the full monthly de minimis allowance in
    period 1). Net = gross - semi-monthly statutory deductions.

    Args:
        period: 1 or 2
        year: Year
        month: Month (1-12)
        recorded: Finalized weekday shift totals
        weekend_entries: Manually entered weekend shifts
        config: Compensation rules
        today: Date highlighted as today

    Returns:
        PeriodView
    """
    dates = enumerate_period_dates(period, year, month)
    weekdays = period_weekdays(period, year, month)

    days = []
    gross = 0.0
    for day in dates:
        earnings, source = daily_earnings(day, weekdays, recorded, weekend_entries, config)
        gross += earnings
        days.append(
            DayEarnings(
                date=day,
                earnings=earnings,
                source=source,
                is_weekend=is_rest_day(day),
                is_today=day == today,
                is_recorded_weekend=source == DaySource.WEEKEND_ENTRY,
                is_recorded=source == DaySource.RECORDED,
            )
        )

    allowance = config.de_minimis_monthly if period == 1 else 0.0
    gross += allowance
    deductions = semi_monthly_deductions(config)
    nav = get_month_navigation(year, month)

    return PeriodView(
        period=period,
        year=year,
        month=month,
        title=dates[0].strftime(MONTH_TITLE_FORMAT),
        label=f"{dates[0].day}-{dates[-1].day}",
        # Calendar columns start on Monday
        leading_blanks=dates[0].weekday(),
        days=days,
        gross_total=gross,
        allowance=allowance,
        deductions=deductions,
        period_net_total=gross - deductions,
        **nav,
    )
