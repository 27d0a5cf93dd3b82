# nightpay/routes/shared.py
"""
Shared utilities, templates and schemas for route modules.
"""

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from nightpay.core.config import DATE_FORMAT_ISO, TIME_FORMAT_HM
from nightpay.core.constants import WEEKDAY_LABELS
from nightpay.core.engine import EarningsEngine
from nightpay.core.helpers import format_money

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

# Shared Jinja2 templates instance
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

# Money filter - use {{ amount | money }} in templates
templates.env.filters["money"] = format_money
templates.env.filters["date_format"] = lambda v: v.strftime(DATE_FORMAT_ISO) if v else ""
templates.env.filters["time_format"] = lambda v: v.strftime(TIME_FORMAT_HM) if v else ""

templates.env.globals["weekday_labels"] = WEEKDAY_LABELS


def get_engine(request: Request) -> EarningsEngine:
    """Dependency returning the engine created in the application lifespan."""
    return request.app.state.engine


# ============ Pydantic schemas ============


class WeekendEntryIn(BaseModel):
    # Raw values; validated in nightpay.core.validators so bad input gives 400
    hours_worked: float | str
    start_time: str
