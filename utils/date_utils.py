from datetime import date, datetime
from typing import Optional

from dateutil.relativedelta import relativedelta


def add_months(d: date, months: int) -> date:
    """Add N calendar months; day is clamped to the target month's length."""
    return d + relativedelta(months=months)


def month_start(d: date) -> date:
    return d.replace(day=1)


def month_key(d: date) -> str:
    """2024-01-05 -> '2024-01'"""
    return d.strftime("%Y-%m")


def parse_date(value) -> Optional[date]:
    """Parse a date from a ``date``, ``datetime`` or ISO string.

    ISO strings may carry a time part (``2024-01-05T00:00:00.000Z``); only the
    date part is used.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Cannot parse date from {value!r}")


def format_date(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None
