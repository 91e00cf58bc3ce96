# app/utils/periods.py - Month-granularity date helpers

import re
from datetime import date
from typing import Optional

MONTH_FORMAT = "MM-YYYY"

_MONTH_RE = re.compile(r"^([0-9]{2})-([0-9]{4})$")


def parse_month(value: str) -> date:
    """Parse an ``MM-YYYY`` string into the first day of that month."""
    if not isinstance(value, str):
        raise ValueError(f"expected {MONTH_FORMAT} string")
    match = _MONTH_RE.match(value.strip())
    if not match:
        raise ValueError(f"invalid month '{value}', expected {MONTH_FORMAT}")
    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise ValueError(f"invalid month '{value}', expected {MONTH_FORMAT}")
    return date(year, month, 1)


def format_month(value: date) -> str:
    return f"{value.month:02d}-{value.year:04d}"


def month_start(value: date) -> date:
    return value.replace(day=1)


def current_month(today: Optional[date] = None) -> date:
    """First day of the wall-clock month (or of ``today`` when given)."""
    return month_start(today or date.today())


def months_inclusive(start: date, end: date) -> int:
    # Both ends count: 01-2024..01-2024 is one month
    return (end.year - start.year) * 12 + (end.month - start.month) + 1
