import datetime
import math

from fastapi import HTTPException, status

from nightpay.core.config import DATE_FORMAT_ISO
from nightpay.core.constants import PAY_PERIODS
from nightpay.core.time_utils import is_rest_day, parse_start_time


def validate_period(period: int) -> int:
    """
    Make sure period is 1 or 2.

    Returns the period if valid, otherwise raises 404.
    """
    if period not in PAY_PERIODS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Pay period not found",
        )
    return period


def validate_month_params(year: int | None, month: int | None) -> tuple[int, int] | None:
    """
    Validate an optional year/month pair for the period calendars.

    - Neither set: returns None (caller uses the current month).
    - Both set: validated by building day 1, returns (year, month).
    - Only one of them set, or an invalid month: HTTP 400.
    """
    if year is None and month is None:
        return None

    if year is None or month is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date parameter combination",
        )

    try:
        datetime.date(year, month, 1)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )
    return year, month


def validate_weekend_date(value: str) -> datetime.date:
    """Parse an ISO date and make sure it is a Saturday or Sunday. HTTP 400 otherwise."""
    try:
        day = datetime.datetime.strptime(value, DATE_FORMAT_ISO).date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )

    if not is_rest_day(day):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Weekend shifts can only be recorded on Saturdays and Sundays",
        )
    return day


def validate_weekend_input(
    hours_worked: float | str,
    start_time: str,
    max_hours: float,
) -> tuple[float, datetime.time]:
    """
    Validate user-entered weekend shift data.

    Hours must be a positive number no larger than max_hours, and the start
    time must be HH:MM (24-hour). Invalid input raises HTTP 400; the caller
    must not touch stored state in that case.
    """
    try:
        hours = float(hours_worked)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Hours worked must be a number",
        )

    if not math.isfinite(hours) or hours <= 0 or hours > max_hours:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Hours worked must be greater than 0 and at most {max_hours:g}",
        )

    try:
        start = parse_start_time(start_time)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Start time must be HH:MM (24-hour)",
        )

    return hours, start
