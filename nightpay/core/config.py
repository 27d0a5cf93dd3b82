# nightpay/core/config.py

import os
from typing import Final


# ==========================
# Compensation defaults
# ==========================

#: Fixed monthly salary in PHP.
MONTHLY_SALARY: Final[float] = 28_000.0

#: Average working days per month used to derive the hourly rate.
WORKING_DAYS_PER_MONTH: Final[int] = 26

#: Standard hours per day used to derive the hourly rate.
#: Hourly rate = MONTHLY_SALARY / (WORKING_DAYS_PER_MONTH * HOURS_PER_DAY).
HOURS_PER_DAY: Final[int] = 8

#: Night differential premium, applied to hours between 22:00 and 06:00.
NIGHT_DIFF_RATE: Final[float] = 0.18

#: Weekday overtime multiplier.
OVERTIME_MULTIPLIER: Final[float] = 1.25

#: Rest-day multiplier for the first REST_DAY_BASE_HOURS worked.
REST_DAY_MULTIPLIER: Final[float] = 1.30

#: Rest-day multiplier for hours beyond REST_DAY_BASE_HOURS (also rest-day overtime).
REST_DAY_EXCESS_MULTIPLIER: Final[float] = 1.69

#: Hours of a rest day paid at REST_DAY_MULTIPLIER.
REST_DAY_BASE_HOURS: Final[float] = 8.0

#: Paid hours of a scheduled shift (8 regular + 1 extra).
PAID_SHIFT_HOURS: Final[float] = 9.0

#: Unpaid break inside every shift.
UNPAID_BREAK_HOURS: Final[float] = 1.0

#: Minutes tolerated after the scheduled end before overtime accrues.
GRACE_PERIOD_MINUTES: Final[int] = 15

#: Night hours are never paid beyond one standard shift.
NIGHT_HOURS_CAP: Final[float] = 8.0

#: Monthly de minimis allowance, paid in full with period 1.
DE_MINIMIS_MONTHLY: Final[float] = 2_800.0

#: Longest weekend shift that can be entered manually.
MAX_WEEKEND_SHIFT_HOURS: Final[float] = 24.0


# ==========================
# Statutory deductions
# ==========================

#: Withholding tax rate on annual salary above WITHHOLDING_TAX_THRESHOLD.
WITHHOLDING_TAX_RATE: Final[float] = 0.15

#: Annual salary exempt from withholding tax.
WITHHOLDING_TAX_THRESHOLD: Final[float] = 250_000.0

#: Social insurance (SSS) share of the monthly salary.
SOCIAL_INSURANCE_RATE: Final[float] = 0.05

#: Health insurance (PhilHealth) share of the monthly salary.
HEALTH_INSURANCE_RATE: Final[float] = 0.025

#: Lowest monthly PhilHealth contribution.
HEALTH_INSURANCE_FLOOR: Final[float] = 250.0

#: Highest monthly PhilHealth contribution.
HEALTH_INSURANCE_CAP: Final[float] = 2_500.0

#: Housing fund (Pag-IBIG) share of the monthly salary.
HOUSING_FUND_RATE: Final[float] = 0.02

#: Highest monthly Pag-IBIG contribution.
HOUSING_FUND_CAP: Final[float] = 200.0


# ==========================
# Date and time formats
# ==========================

#: ISO format for date keys in storage and URLs.
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Format for shift start times entered by the user (for example "22:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"

#: Calendar title format, for example "October 2026".
MONTH_TITLE_FORMAT: Final[str] = "%B %Y"


# ==========================
# Runtime environment
# ==========================

#: True when running in production (JSON logs, Sentry, strict CORS).
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: SQLAlchemy URL of the local record store.
DATABASE_URL: Final[str] = os.getenv("DATABASE_URL", "sqlite:///./nightpay.db")

#: Optional JSON file overriding the compensation defaults above.
COMPENSATION_CONFIG_PATH: Final[str] = os.getenv("COMPENSATION_CONFIG", "").strip()
