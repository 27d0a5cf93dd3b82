"""Shift accounting: live shift state machine and weekend shift earnings."""

import datetime
import logging

from nightpay.core.constants import SHIFT_START_HOUR
from nightpay.core.models import CompensationConfig, EarningsBreakdown, ShiftState, WeekendShiftEntry
from nightpay.core.time_utils import hours_between, is_rest_day, to_local

from .night import night_overlap_hours
from .rates import base_rate_earnings, night_earnings, overtime_earnings

logger = logging.getLogger(__name__)

SCHEDULED_START_TIME = datetime.time(SHIFT_START_HOUR, 0)


def compute_breakdown(
    paid_hours: float,
    rest_day: bool,
    config: CompensationConfig,
    start_time: datetime.time = SCHEDULED_START_TIME,
) -> EarningsBreakdown:
    """
    Canonical earnings breakdown for a number of paid hours.

    Paid hours up to scheduled hours + grace period are base hours, the rest
    is overtime. Night hours are the overlap of all paid hours with the night
    window, capped at one standard shift. No allowance is accrued here.

    Args:
        paid_hours: Elapsed hours minus the unpaid break
        rest_day: True when the shift started on a Saturday or Sunday
        config: Compensation rules
        start_time: Local start time of the shift (22:00 for scheduled shifts)

    Returns:
        EarningsBreakdown
    """
    paid_hours = max(paid_hours, 0.0)
    threshold = config.overtime_threshold_hours

    base_hours = min(paid_hours, threshold)
    ot_hours = max(paid_hours - threshold, 0.0)
    night_hours = night_overlap_hours(base_hours + ot_hours, start_time, config)

    base = base_rate_earnings(base_hours, rest_day, config)
    night = night_earnings(night_hours, config)
    overtime = overtime_earnings(ot_hours, rest_day, config)

    return EarningsBreakdown(
        paid_hours=paid_hours,
        base_hours=base_hours,
        overtime_hours=ot_hours,
        night_hours=night_hours,
        base_earnings=base,
        night_earnings=night,
        overtime_earnings=overtime,
        total_earnings=base + night + overtime,
    )


def weekend_breakdown(entry: WeekendShiftEntry, config: CompensationConfig) -> EarningsBreakdown:
    """
    Earnings of a manually entered rest-day shift.

    All hours go through the rest-day tiers (1.30x then 1.69x); there is no
    separate overtime component and no unpaid break is deducted.
    """
    hours = min(entry.hours_worked, config.max_weekend_shift_hours)
    night_hours = night_overlap_hours(hours, entry.start_time, config)

    base = base_rate_earnings(hours, True, config)
    night = night_earnings(night_hours, config)

    return EarningsBreakdown(
        paid_hours=hours,
        base_hours=hours,
        night_hours=night_hours,
        base_earnings=base,
        night_earnings=night,
        total_earnings=base + night,
    )


def weekend_earnings(entry: WeekendShiftEntry, config: CompensationConfig) -> float:
    """Total earnings of a weekend shift entry."""
    return weekend_breakdown(entry, config).total_earnings


class ShiftTracker:
    """
    State machine for one scheduled shift instance.

    RUNNING -> ENDED (explicit end) or RUNNING -> AUTO_FINALIZED (weekday only).
    Terminal states never return to RUNNING. Elapsed time is frozen at the
    instant the shift leaves RUNNING.
    """

    def __init__(self, start: datetime.datetime, config: CompensationConfig):
        self.start = to_local(start)
        self.config = config
        self.state = ShiftState.RUNNING
        self._frozen_elapsed: float | None = None
        self._auto_finalized = False

    def __repr__(self):
        return f"<ShiftTracker(start={self.start.isoformat()}, state={self.state.value})>"

    @property
    def shift_date(self) -> datetime.date:
        """Calendar date the shift started on. Key for recorded earnings."""
        return self.start.date()

    @property
    def is_rest_day(self) -> bool:
        return is_rest_day(self.shift_date)

    @property
    def is_running(self) -> bool:
        return self.state == ShiftState.RUNNING

    def has_started(self, now: datetime.datetime) -> bool:
        return to_local(now) >= self.start

    def elapsed_hours(self, now: datetime.datetime) -> float:
        if self._frozen_elapsed is not None:
            return self._frozen_elapsed
        return hours_between(self.start, to_local(now))

    def paid_hours(self, now: datetime.datetime) -> float:
        return max(self.elapsed_hours(now) - self.config.unpaid_break_hours, 0.0)

    def breakdown(self, now: datetime.datetime) -> EarningsBreakdown:
        return compute_breakdown(self.paid_hours(now), self.is_rest_day, self.config)

    def end(self, now: datetime.datetime) -> EarningsBreakdown | None:
        """
        Explicit End Shift.

        Returns the final breakdown, or None if the shift already left RUNNING.
        """
        if not self.is_running:
            logger.debug("End shift ignored, %r is not running", self)
            return None

        self._frozen_elapsed = self.elapsed_hours(now)
        self.state = ShiftState.ENDED
        logger.info("Shift %s ended after %.2f elapsed hours", self.shift_date, self._frozen_elapsed)
        return self.breakdown(now)

    def is_due_for_auto_finalize(self, now: datetime.datetime) -> bool:
        """Running weekday shift whose paid time reached scheduled hours + grace."""
        if self._auto_finalized or not self.is_running or self.is_rest_day:
            return False
        return self.paid_hours(now) >= self.config.overtime_threshold_hours

    def auto_finalize(self, now: datetime.datetime) -> EarningsBreakdown | None:
        """
        Finalize the shift with the elapsed time so far, at most once.

        Returns the final breakdown when it fired, otherwise None.
        """
        if not self.is_due_for_auto_finalize(now):
            return None

        self._auto_finalized = True
        self._frozen_elapsed = self.elapsed_hours(now)
        self.state = ShiftState.AUTO_FINALIZED
        logger.info("Shift %s auto-finalized after %.2f elapsed hours", self.shift_date, self._frozen_elapsed)
        return self.breakdown(now)
