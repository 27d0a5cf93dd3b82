"""Hourly rate and premium multipliers (weekday, rest day, overtime)."""

from nightpay.core.models import CompensationConfig


def hourly_rate(config: CompensationConfig) -> float:
    """
    Hourly rate derived from the monthly salary.

    Formula: monthly_salary / (working_days_per_month * hours_per_day)
    """
    divisor = config.working_days_per_month * config.hours_per_day
    if divisor <= 0:
        return 0.0
    return config.monthly_salary / divisor


def base_rate_earnings(hours: float, rest_day: bool, config: CompensationConfig) -> float:
    """
    Base pay for regular (non-overtime) hours.

    Weekday: every hour at 1.00x hourly.
    Rest day: the first rest_day_base_hours at 1.30x, the remainder at 1.69x.

    Args:
        hours: Regular worked hours
        rest_day: True when the shift started on a Saturday or Sunday
        config: Compensation rules

    Returns:
        Base earnings in PHP
    """
    hours = max(hours, 0.0)
    rate = hourly_rate(config)

    if not rest_day:
        return rate * hours

    first_hours = min(hours, config.rest_day_base_hours)
    excess_hours = max(hours - config.rest_day_base_hours, 0.0)
    return rate * config.rest_day_multiplier * first_hours + rate * config.rest_day_excess_multiplier * excess_hours


def overtime_rate(rest_day: bool, config: CompensationConfig) -> float:
    """
    Hourly overtime rate.

    Weekday overtime is paid at the overtime multiplier (1.25x). Rest days
    have no separate overtime tier: the rest-day excess multiplier (1.69x)
    already applies.
    """
    multiplier = config.rest_day_excess_multiplier if rest_day else config.overtime_multiplier
    return hourly_rate(config) * multiplier


def overtime_earnings(hours: float, rest_day: bool, config: CompensationConfig) -> float:
    return overtime_rate(rest_day, config) * max(hours, 0.0)


def night_earnings(night_hours: float, config: CompensationConfig) -> float:
    """Night differential pay: hourly * night_diff_rate * night hours."""
    return hourly_rate(config) * config.night_diff_rate * max(night_hours, 0.0)
