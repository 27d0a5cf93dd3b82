# nightpay/core/utils.py
import datetime


def get_month_navigation(year: int, month: int) -> dict[str, int]:
    """
    Previous and next month for the period calendars.

    Keys: prev_year, prev_month, next_year, next_month
    """
    first_of_month = datetime.date(year, month, 1)
    prev_month_date = first_of_month - datetime.timedelta(days=1)

    if month == 12:
        next_year = year + 1
        next_month = 1
    else:
        next_year = year
        next_month = month + 1

    return {
        "prev_year": prev_month_date.year,
        "prev_month": prev_month_date.month,
        "next_year": next_year,
        "next_month": next_month,
    }
