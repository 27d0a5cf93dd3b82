import calendar
import datetime
import logging
from typing import Any
from zoneinfo import ZoneInfo

from nightpay.core.config import TIME_FORMAT_HM
from nightpay.core.constants import (
    FIRST_PERIOD_LAST_DAY,
    PAY_PERIODS,
    REST_DAY_FIRST_WEEKDAY,
    SECONDS_PER_HOUR,
    SHIFT_ROLLOVER_HOUR,
    SHIFT_START_HOUR,
    TARGET_TIMEZONE,
)

logger = logging.getLogger(__name__)

LOCAL_TZ = ZoneInfo(TARGET_TIMEZONE)


def to_local(instant: datetime.datetime) -> datetime.datetime:
    """Normalize an instant to the target timezone.

    Naive datetimes are taken to already be local wall-clock time.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=LOCAL_TZ)
    return instant.astimezone(LOCAL_TZ)


def local_now() -> datetime.datetime:
    """Current instant in the target timezone, independent of the host timezone."""
    return datetime.datetime.now(LOCAL_TZ)


def shift_window_start(instant: datetime.datetime) -> datetime.datetime:
    """
    Start of the shift window an instant belongs to.

    22:00 on the same day when the local hour is 08 or later,
    otherwise 22:00 on the previous day.
    """
    local = to_local(instant)
    start = local.replace(hour=SHIFT_START_HOUR, minute=0, second=0, microsecond=0)
    if local.hour < SHIFT_ROLLOVER_HOUR:
        start -= datetime.timedelta(days=1)
    return start


def is_rest_day(day: datetime.date) -> bool:
    """Saturday and Sunday are rest days."""
    return day.weekday() >= REST_DAY_FIRST_WEEKDAY


def weekday_count(start_date: datetime.date, end_date: datetime.date) -> int:
    """Count Monday-Friday dates in [start_date, end_date], inclusive."""
    count = 0
    current = start_date
    while current <= end_date:
        if not is_rest_day(current):
            count += 1
        current += datetime.timedelta(days=1)
    return count


def period_bounds(period: int, year: int, month: int) -> tuple[datetime.date, datetime.date]:
    """
    First and last date of a semi-monthly period.

    Args:
        period: 1 (day 1-15) or 2 (day 16 to end of month)
        year: Year
        month: Month (1-12)

    Returns:
        (first_date, last_date)

    Raises:
        ValueError: If period is not 1 or 2
    """
    if period not in PAY_PERIODS:
        raise ValueError(f"Unsupported pay period: {period!r}")

    if period == 1:
        return datetime.date(year, month, 1), datetime.date(year, month, FIRST_PERIOD_LAST_DAY)

    last_day = calendar.monthrange(year, month)[1]
    return datetime.date(year, month, FIRST_PERIOD_LAST_DAY + 1), datetime.date(year, month, last_day)


def enumerate_period_dates(period: int, year: int, month: int) -> list[datetime.date]:
    """Ordered dates of a pay period."""
    first, last = period_bounds(period, year, month)
    return [first + datetime.timedelta(days=offset) for offset in range((last - first).days + 1)]


def parse_start_time(value: Any) -> datetime.time:
    """Parse a shift start time.

    Handles:
    1) str times: "HH:MM" (24-hour)
    2) datetime.time objects
    3) error handling via logging + ValueError (no bare except)
    """
    if isinstance(value, datetime.time):
        return value.replace(second=0, microsecond=0, tzinfo=None)

    if isinstance(value, str):
        s = value.strip()
        if not s:
            logger.error("Start time is empty string")
            raise ValueError("Start time is empty")

        try:
            return datetime.datetime.strptime(s, TIME_FORMAT_HM).time()
        except ValueError as e:
            logger.warning("Failed parsing start time as HH:MM. value=%r", value)
            raise ValueError(f"Invalid start time format: {value!r}") from e

    logger.error("Unsupported start time type. type=%s value=%r", type(value).__name__, value)
    raise ValueError(f"Unsupported start time type: {type(value).__name__}")


def hours_between(start: datetime.datetime, end: datetime.datetime) -> float:
    """Hours from start to end, never negative."""
    return max((end - start).total_seconds() / SECONDS_PER_HOUR, 0.0)
