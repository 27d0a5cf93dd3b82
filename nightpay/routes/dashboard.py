# nightpay/routes/dashboard.py
"""
Dashboard route - live earnings and the two payroll calendars.
"""

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from nightpay.core.constants import PAY_PERIODS
from nightpay.core.earnings import deduction_breakdown
from nightpay.core.engine import EarningsEngine
from nightpay.core.validators import validate_month_params, validate_weekend_date, validate_weekend_input
from nightpay.routes.shared import get_engine, templates

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def read_root(
    request: Request,
    year: int | None = Query(None),
    month: int | None = Query(None),
    engine: EarningsEngine = Depends(get_engine),
):
    """Home page - live shift breakdown and the payroll calendars."""
    state = engine.tick()
    month_params = validate_month_params(year, month)

    if month_params is None:
        periods = state.periods
    else:
        periods = [engine.period_view(p, year=month_params[0], month=month_params[1]) for p in PAY_PERIODS]

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "now": state.now,
            "live": state.live,
            "periods": periods,
            "deductions": deduction_breakdown(engine.config),
            "weekend_entries": engine.weekend_entries,
            "max_weekend_hours": engine.config.max_weekend_shift_hours,
        },
    )


@router.post("/shift/end")
async def end_shift_form(engine: EarningsEngine = Depends(get_engine)):
    """End Shift button. Ending twice is a no-op."""
    engine.end_shift()
    return RedirectResponse(url="/", status_code=303)


@router.post("/weekend")
async def weekend_entry_form(
    date: str = Form(...),
    hours_worked: str = Form(""),
    start_time: str = Form(""),
    action: str = Form("save"),
    engine: EarningsEngine = Depends(get_engine),
):
    """Save or delete a weekend shift entry from the calendar form."""
    day = validate_weekend_date(date)

    if action == "delete":
        engine.delete_weekend_entry(day)
    else:
        hours, start = validate_weekend_input(hours_worked, start_time, engine.config.max_weekend_shift_hours)
        engine.record_weekend_entry(day, hours, start)

    return RedirectResponse(url=f"/?year={day.year}&month={day.month}", status_code=303)
