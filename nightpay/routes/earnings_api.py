# nightpay/routes/earnings_api.py
"""
JSON API for the live display and the payroll calendars.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from nightpay.core.earnings import deduction_breakdown
from nightpay.core.engine import EarningsEngine
from nightpay.core.models import DisplayState, EarningsBreakdown, LiveBreakdown, PeriodView, WeekendShiftEntry
from nightpay.core.validators import (
    validate_month_params,
    validate_period,
    validate_weekend_date,
    validate_weekend_input,
)
from nightpay.routes.shared import WeekendEntryIn, get_engine

router = APIRouter(prefix="/api", tags=["earnings_api"])


@router.get("/state", response_model=DisplayState)
async def get_state(engine: EarningsEngine = Depends(get_engine)):
    """Full recompute: live breakdown plus both calendars of the current month."""
    return engine.tick()


@router.get("/live", response_model=LiveBreakdown)
async def get_live(engine: EarningsEngine = Depends(get_engine)):
    """Live earnings of the current shift."""
    return engine.live_breakdown()


@router.get("/period/{period}", response_model=PeriodView)
async def get_period(
    period: int,
    year: int | None = Query(None),
    month: int | None = Query(None),
    engine: EarningsEngine = Depends(get_engine),
):
    """Payroll calendar for period 1 (1-15) or 2 (16-end), current month by default."""
    period = validate_period(period)
    month_params = validate_month_params(year, month)

    if month_params is None:
        return engine.period_view(period)

    year, month = month_params
    return engine.period_view(period, year=year, month=month)


@router.get("/deductions")
async def get_deductions(engine: EarningsEngine = Depends(get_engine)):
    """Itemized semi-monthly statutory deductions."""
    return dict(deduction_breakdown(engine.config))


@router.post("/shift/end", response_model=EarningsBreakdown)
async def end_shift(engine: EarningsEngine = Depends(get_engine)):
    """
    End the current shift and return its final breakdown.

    Weekday shifts are recorded for the shift's start date.
    """
    breakdown = engine.end_shift()
    if breakdown is None:
        raise HTTPException(status_code=409, detail="No running shift to end")
    return breakdown


@router.put("/weekend/{date}", response_model=WeekendShiftEntry)
async def put_weekend_entry(
    date: str,
    payload: WeekendEntryIn,
    engine: EarningsEngine = Depends(get_engine),
):
    """Create or replace the weekend shift entry for a Saturday or Sunday."""
    day = validate_weekend_date(date)
    hours, start_time = validate_weekend_input(
        payload.hours_worked,
        payload.start_time,
        engine.config.max_weekend_shift_hours,
    )
    return engine.record_weekend_entry(day, hours, start_time)


@router.delete("/weekend/{date}")
async def delete_weekend_entry(date: str, engine: EarningsEngine = Depends(get_engine)):
    """Delete a weekend shift entry."""
    day = validate_weekend_date(date)
    if not engine.delete_weekend_entry(day):
        raise HTTPException(status_code=404, detail="Weekend entry not found")
    return {"date": day.isoformat(), "deleted": True}
