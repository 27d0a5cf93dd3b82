import datetime
import enum

from pydantic import BaseModel, ConfigDict, Field

from nightpay.core import config


class CompensationConfig(BaseModel):
    """Immutable pay rules for the single employee. Passed into every engine function."""

    model_config = ConfigDict(frozen=True)

    monthly_salary: float = config.MONTHLY_SALARY
    working_days_per_month: int = config.WORKING_DAYS_PER_MONTH
    hours_per_day: int = config.HOURS_PER_DAY
    night_diff_rate: float = config.NIGHT_DIFF_RATE
    overtime_multiplier: float = config.OVERTIME_MULTIPLIER
    rest_day_multiplier: float = config.REST_DAY_MULTIPLIER
    rest_day_excess_multiplier: float = config.REST_DAY_EXCESS_MULTIPLIER
    rest_day_base_hours: float = config.REST_DAY_BASE_HOURS
    paid_shift_hours: float = config.PAID_SHIFT_HOURS
    unpaid_break_hours: float = config.UNPAID_BREAK_HOURS
    grace_period_minutes: int = config.GRACE_PERIOD_MINUTES
    night_hours_cap: float = config.NIGHT_HOURS_CAP
    de_minimis_monthly: float = config.DE_MINIMIS_MONTHLY
    max_weekend_shift_hours: float = config.MAX_WEEKEND_SHIFT_HOURS
    withholding_tax_rate: float = config.WITHHOLDING_TAX_RATE
    withholding_tax_threshold: float = config.WITHHOLDING_TAX_THRESHOLD
    social_insurance_rate: float = config.SOCIAL_INSURANCE_RATE
    health_insurance_rate: float = config.HEALTH_INSURANCE_RATE
    health_insurance_floor: float = config.HEALTH_INSURANCE_FLOOR
    health_insurance_cap: float = config.HEALTH_INSURANCE_CAP
    housing_fund_rate: float = config.HOUSING_FUND_RATE
    housing_fund_cap: float = config.HOUSING_FUND_CAP

    @property
    def grace_period_hours(self) -> float:
        return self.grace_period_minutes / 60.0

    @property
    def overtime_threshold_hours(self) -> float:
        """Paid hours after which overtime starts accruing (scheduled hours plus grace)."""
        return self.paid_shift_hours + self.grace_period_hours


class ShiftState(str, enum.Enum):
    RUNNING = "running"
    ENDED = "ended"
    AUTO_FINALIZED = "auto_finalized"


class DaySource(str, enum.Enum):
    """Where a calendar day's earnings come from."""

    RECORDED = "recorded"  # finalized weekday shift
    PROJECTED = "projected"  # weekday without a recorded shift
    WEEKEND_ENTRY = "weekend_entry"  # manually entered rest-day shift
    REST = "rest"  # rest day without an entry


class WeekendShiftEntry(BaseModel):
    """Manually entered rest-day shift."""

    model_config = ConfigDict(frozen=True)

    hours_worked: float = Field(gt=0)
    start_time: datetime.time


class EarningsBreakdown(BaseModel):
    """Canonical earnings of one shift."""

    paid_hours: float = 0.0
    base_hours: float = 0.0
    overtime_hours: float = 0.0
    night_hours: float = 0.0
    base_earnings: float = 0.0
    night_earnings: float = 0.0
    overtime_earnings: float = 0.0
    total_earnings: float = 0.0


class LiveBreakdown(BaseModel):
    """Live display values of the current shift, recomputed every tick."""

    shift_start: datetime.datetime
    shift_state: ShiftState
    has_started: bool
    is_rest_day: bool
    hours_worked_display: str
    paid_hours: float
    base_earnings: float
    night_earnings: float
    overtime_earnings: float
    total_earnings: float


class DayEarnings(BaseModel):
    date: datetime.date
    earnings: float
    source: DaySource
    is_weekend: bool
    is_today: bool
    is_recorded_weekend: bool
    is_recorded: bool


class PeriodView(BaseModel):
    """One semi-monthly payroll calendar with its net total."""

    period: int
    year: int
    month: int
    title: str
    label: str
    leading_blanks: int
    days: list[DayEarnings]
    gross_total: float
    allowance: float
    deductions: float
    period_net_total: float
    prev_year: int
    prev_month: int
    next_year: int
    next_month: int


class DisplayState(BaseModel):
    """Everything the presentation layer needs after one tick."""

    now: datetime.datetime
    live: LiveBreakdown
    periods: list[PeriodView]
