# nightpay/core/constants.py
from typing import Final

# ==========================
# Timezone / local time
# ==========================

#: IANA name of the timezone all shift logic is evaluated in (UTC+8).
#: Every boundary (22:00, 08:00, 06:00) is a local wall-clock hour in this zone.
TARGET_TIMEZONE: Final[str] = "Asia/Manila"


# ==========================
# Shift window
# ==========================

#: Hour the night shift starts (22:00).
SHIFT_START_HOUR: Final[int] = 22

#: Hour the shift window rolls over to the next evening (08:00).
#: Instants before this hour belong to the shift that started the previous day.
SHIFT_ROLLOVER_HOUR: Final[int] = 8


# ==========================
# Night differential
# ==========================

#: Start of the night window, in minutes after midnight (22:00).
NIGHT_WINDOW_START_MINUTE: Final[int] = 22 * 60

#: End of the night window, in minutes after the following midnight (06:00).
NIGHT_WINDOW_END_MINUTE: Final[int] = 6 * 60


# ==========================
# Week structure / dates
# ==========================

#: Minutes per day.
MINUTES_PER_DAY: Final[int] = 24 * 60

#: Minutes per hour.
MINUTES_PER_HOUR: Final[int] = 60

#: Seconds per hour. Used when converting a timedelta to hours.
SECONDS_PER_HOUR: Final[int] = 3600

#: First weekday index treated as a rest day (5 = Saturday, 6 = Sunday).
REST_DAY_FIRST_WEEKDAY: Final[int] = 5

#: Weekday abbreviations indexed like datetime.weekday() (0 = Monday).
#: Used as column headers in the period calendars.
WEEKDAY_LABELS: Final[tuple[str, ...]] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


# ==========================
# Pay periods
# ==========================

#: Periods of a month (1 = day 1-15, 2 = day 16 to end of month).
PAY_PERIODS: Final[tuple[int, ...]] = (1, 2)

#: Last day of period 1.
FIRST_PERIOD_LAST_DAY: Final[int] = 15

#: Number of semi-monthly periods per year. Withholding tax is spread over these.
SEMI_MONTHLY_PERIODS_PER_YEAR: Final[int] = 24


# ==========================
# Storage
# ==========================

#: Key for recorded weekday shifts (date -> finalized total earnings).
STORAGE_KEY_RECORDED_SHIFTS: Final[str] = "recorded_weekday_shifts"

#: Key for manually entered weekend shifts (date -> hours + start time).
STORAGE_KEY_WEEKEND_ENTRIES: Final[str] = "weekend_shift_entries"


# ==========================
# Presentation
# ==========================

#: Currency symbol for Philippine pesos.
CURRENCY_SYMBOL: Final[str] = "₱"

#: Interval between live recomputations, in seconds.
DEFAULT_TICK_INTERVAL_SECONDS: Final[float] = 1.0
