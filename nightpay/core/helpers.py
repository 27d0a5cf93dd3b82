# nightpay/core/helpers.py
"""
Shared formatting helpers for templates and the live display.
"""

from nightpay.core.constants import CURRENCY_SYMBOL, SECONDS_PER_HOUR


def format_money(value: float | None) -> str:
    """Format an amount as Philippine pesos, e.g. '₱1,234.50'."""
    if value is None:
        return ""
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def format_duration(hours: float) -> str:
    """Format hours as 'Xh Ym Zs' (floored, never negative)."""
    total_seconds = int(max(hours, 0.0) * SECONDS_PER_HOUR)
    h, remainder = divmod(total_seconds, SECONDS_PER_HOUR)
    m, s = divmod(remainder, 60)
    return f"{h}h {m}m {s}s"
