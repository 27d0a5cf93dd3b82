# nightpay/core/types.py

"""
Type aliases shared by the earnings engine, the repository and the routes.
"""

from datetime import date

from nightpay.core.models import WeekendShiftEntry

MonetaryAmount = float

# Persisted maps
RecordedShifts = dict[date, MonetaryAmount]
WeekendEntries = dict[date, WeekendShiftEntry]
