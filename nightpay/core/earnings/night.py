"""Night differential overlap calculation."""

import datetime

from nightpay.core.constants import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    NIGHT_WINDOW_END_MINUTE,
    NIGHT_WINDOW_START_MINUTE,
)
from nightpay.core.models import CompensationConfig
from nightpay.core.time_utils import parse_start_time


def night_overlap_minutes(
    shift_length_hours: float,
    start_time: datetime.time | str,
    config: CompensationConfig,
) -> float:
    """
    Minutes of [start, start + length) that fall inside the night window 22:00-06:00.

    Every night window is split at midnight into a pre-midnight segment
    (22:00-24:00) and a post-midnight segment (00:00-06:00). Each segment the
    worked interval can reach is clipped to that interval and summed, which
    covers shifts that stay before midnight, span midnight, or start after it.

    Args:
        shift_length_hours: Worked hours, clamped to [0, max_weekend_shift_hours]
        start_time: Start as datetime.time or "HH:MM"
        config: Compensation rules

    Returns:
        Overlapping minutes (uncapped)
    """
    start = parse_start_time(start_time)
    length_hours = min(max(shift_length_hours, 0.0), config.max_weekend_shift_hours)

    start_min = start.hour * MINUTES_PER_HOUR + start.minute
    end_min = start_min + length_hours * MINUTES_PER_HOUR

    total = 0.0
    for day_offset in range(int(end_min // MINUTES_PER_DAY) + 1):
        midnight = day_offset * MINUTES_PER_DAY

        # 00:00-06:00 of this calendar day
        total += _overlap(start_min, end_min, midnight, midnight + NIGHT_WINDOW_END_MINUTE)
        # 22:00-24:00 of this calendar day
        total += _overlap(start_min, end_min, midnight + NIGHT_WINDOW_START_MINUTE, midnight + MINUTES_PER_DAY)

    return total


def night_overlap_hours(
    shift_length_hours: float,
    start_time: datetime.time | str,
    config: CompensationConfig,
) -> float:
    """
    Night differential hours of a shift, capped at one standard shift.

    Night differential is defined over the regular 8-hour base, so overtime
    never adds night hours beyond config.night_hours_cap.
    """
    hours = night_overlap_minutes(shift_length_hours, start_time, config) / MINUTES_PER_HOUR
    return min(hours, config.night_hours_cap)


def _overlap(a_start: float, a_end: float, b_start: float, b_end: float) -> float:
    """Length of the intersection of [a_start, a_end) and [b_start, b_end)."""
    return max(min(a_end, b_end) - max(a_start, b_start), 0.0)
