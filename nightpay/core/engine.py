# nightpay/core/engine.py
"""
Earnings engine - owns the current shift instance and the two record maps.

All recomputation goes through tick(now), which makes the engine independent
of any particular scheduler and testable with synthetic timestamps.
"""

import datetime
import logging
from collections.abc import Callable

from nightpay.core.constants import PAY_PERIODS
from nightpay.core.earnings import ShiftTracker, build_period_view
from nightpay.core.helpers import format_duration
from nightpay.core.models import (
    CompensationConfig,
    DisplayState,
    EarningsBreakdown,
    LiveBreakdown,
    PeriodView,
    WeekendShiftEntry,
)
from nightpay.core.sentry_config import add_breadcrumb
from nightpay.core.storage import EarningsRepository
from nightpay.core.time_utils import is_rest_day, local_now, parse_start_time, shift_window_start, to_local

logger = logging.getLogger(__name__)


class EarningsEngine:
    """
    Composition object behind the live display and the payroll calendars.

    The current shift instance is the one for shift_window_start(now). A
    running weekday shift is kept past the 08:00 window rollover until it
    auto-finalizes (scheduled hours + grace period) or is ended explicitly.
    """

    def __init__(
        self,
        config: CompensationConfig,
        repository: EarningsRepository,
        clock: Callable[[], datetime.datetime] = local_now,
    ):
        self.config = config
        self.repository = repository
        self.clock = clock
        self.recorded = repository.load_recorded_shifts()
        self.weekend_entries = repository.load_weekend_entries()
        self._shift: ShiftTracker | None = None

        logger.info(
            "Earnings engine started",
            extra={
                "extra_fields": {
                    "recorded_shifts": len(self.recorded),
                    "weekend_entries": len(self.weekend_entries),
                }
            },
        )

    # === Queries ===

    def tick(self, now: datetime.datetime | None = None) -> DisplayState:
        """Recompute everything for one instant. Auto-finalization is attempted first."""
        now = self._resolve_now(now)
        tracker = self.current_shift(now)
        self._try_auto_finalize(tracker, now)

        return DisplayState(
            now=now,
            live=self.live_breakdown(now),
            periods=[self.period_view(period, now) for period in PAY_PERIODS],
        )

    def current_shift(self, now: datetime.datetime | None = None) -> ShiftTracker:
        """Shift instance for now, rolling over to a new instance when the window moves."""
        now = self._resolve_now(now)
        window = shift_window_start(now)
        tracker = self._shift

        if tracker is not None and tracker.start != window:
            if self._is_holdover(tracker, window, now):
                return tracker
            if tracker.start < window:
                self._try_auto_finalize(tracker, now)
            logger.debug("Shift window rolled over from %s to %s", tracker.start, window)
            tracker = None

        if tracker is None:
            tracker = ShiftTracker(window, self.config)
            self._shift = tracker

        return tracker

    def live_breakdown(self, now: datetime.datetime | None = None) -> LiveBreakdown:
        now = self._resolve_now(now)
        tracker = self.current_shift(now)
        breakdown = tracker.breakdown(now)

        return LiveBreakdown(
            shift_start=tracker.start,
            shift_state=tracker.state,
            has_started=tracker.has_started(now),
            is_rest_day=tracker.is_rest_day,
            hours_worked_display=format_duration(breakdown.paid_hours),
            paid_hours=breakdown.paid_hours,
            base_earnings=breakdown.base_earnings,
            night_earnings=breakdown.night_earnings,
            overtime_earnings=breakdown.overtime_earnings,
            total_earnings=breakdown.total_earnings,
        )

    def period_view(
        self,
        period: int,
        now: datetime.datetime | None = None,
        year: int | None = None,
        month: int | None = None,
    ) -> PeriodView:
        """Payroll calendar for a period of the given month (default: now's month)."""
        now = self._resolve_now(now)
        return build_period_view(
            period,
            year or now.year,
            month or now.month,
            self.recorded,
            self.weekend_entries,
            self.config,
            today=now.date(),
        )

    # === Commands ===

    def end_shift(self, now: datetime.datetime | None = None) -> EarningsBreakdown | None:
        """
        Explicit End Shift.

        Returns the final breakdown, or None when there is no running shift
        (already ended/finalized, or tonight's shift has not started yet).
        """
        now = self._resolve_now(now)
        tracker = self.current_shift(now)

        if not tracker.has_started(now):
            logger.info("End shift ignored, shift starting %s has not started", tracker.start)
            return None

        breakdown = tracker.end(now)
        if breakdown is None:
            return None

        add_breadcrumb(
            "Shift ended",
            category="shift",
            data={"shift_date": tracker.shift_date.isoformat(), "total": breakdown.total_earnings},
        )
        self._record(tracker, breakdown)
        return breakdown

    def record_weekend_entry(
        self,
        day: datetime.date,
        hours: float,
        start_time: datetime.time | str,
    ) -> WeekendShiftEntry:
        """
        Create or replace the weekend shift entry for a date.

        Raises:
            ValueError: If the date is not a rest day, hours are out of range
                or the start time is malformed. Stored state is unchanged.
        """
        if not is_rest_day(day):
            raise ValueError(f"{day.isoformat()} is not a weekend date")
        if not 0 < hours <= self.config.max_weekend_shift_hours:
            raise ValueError(f"Hours must be greater than 0 and at most {self.config.max_weekend_shift_hours:g}")

        entry = WeekendShiftEntry(hours_worked=hours, start_time=parse_start_time(start_time))
        self.weekend_entries[day] = entry
        self.repository.save_weekend_entries(self.weekend_entries)

        logger.info("Recorded weekend shift %s: %.2fh from %s", day, entry.hours_worked, entry.start_time)
        add_breadcrumb("Weekend entry recorded", category="weekend", data={"date": day.isoformat()})
        return entry

    def delete_weekend_entry(self, day: datetime.date) -> bool:
        """Remove a weekend shift entry. Returns False when there was none."""
        if self.weekend_entries.pop(day, None) is None:
            return False

        self.repository.save_weekend_entries(self.weekend_entries)
        logger.info("Deleted weekend shift %s", day)
        add_breadcrumb("Weekend entry deleted", category="weekend", data={"date": day.isoformat()})
        return True

    def on_session_end(self, now: datetime.datetime | None = None) -> None:
        """Last auto-finalization attempt before in-memory shift state is lost. Advisory."""
        if self._shift is None:
            return
        self._try_auto_finalize(self._shift, self._resolve_now(now))

    # === Private helpers ===

    def _resolve_now(self, now: datetime.datetime | None) -> datetime.datetime:
        return to_local(now if now is not None else self.clock())

    def _auto_finalize_deadline(self, tracker: ShiftTracker) -> datetime.datetime:
        """Instant the paid time of a shift reaches scheduled hours + grace period."""
        return tracker.start + datetime.timedelta(
            hours=self.config.unpaid_break_hours + self.config.overtime_threshold_hours
        )

    def _is_holdover(self, tracker: ShiftTracker, window: datetime.datetime, now: datetime.datetime) -> bool:
        return (
            tracker.is_running
            and not tracker.is_rest_day
            and tracker.start < window
            and now < self._auto_finalize_deadline(tracker)
        )

    def _try_auto_finalize(self, tracker: ShiftTracker, now: datetime.datetime) -> None:
        # A recorded total is only replaced by an explicit End Shift
        if tracker.is_running and tracker.shift_date in self.recorded:
            return

        # Finalize at the threshold instant even when ticks were missed
        at = min(now, self._auto_finalize_deadline(tracker))
        breakdown = tracker.auto_finalize(at)
        if breakdown is not None:
            add_breadcrumb(
                "Shift auto-finalized",
                category="shift",
                data={"shift_date": tracker.shift_date.isoformat(), "total": breakdown.total_earnings},
            )
            self._record(tracker, breakdown)

    def _record(self, tracker: ShiftTracker, breakdown: EarningsBreakdown) -> None:
        """Store the final total of a weekday shift. Rest-day shifts are recorded via weekend entries."""
        if tracker.is_rest_day:
            return
        self.recorded[tracker.shift_date] = breakdown.total_earnings
        self.repository.save_recorded_shifts(self.recorded)
        logger.info("Recorded weekday shift %s: %.2f", tracker.shift_date, breakdown.total_earnings)
