# app/services/cost.py - Total cost over a month window

from datetime import date
from typing import Iterable, Optional

from app.utils.periods import month_start, months_inclusive


def effective_end(end_date: Optional[date], now: date) -> date:
    """Open-ended subscriptions accrue up to the current month, never beyond."""
    return month_start(end_date) if end_date is not None else month_start(now)


def overlap_months(
    start_date: date,
    end_date: Optional[date],
    window_from: date,
    window_to: date,
    now: date,
) -> int:
    """Whole months a subscription is active inside ``[window_from, window_to]``.

    Returns 0 when the intervals do not intersect. Any intersection is
    billed at least one month.
    """
    start = month_start(start_date)
    end = effective_end(end_date, now)
    window_from, window_to = month_start(window_from), month_start(window_to)

    if start > window_to or end < window_from:
        return 0

    overlap_start = max(start, window_from)
    overlap_end = min(end, window_to)
    return max(1, months_inclusive(overlap_start, overlap_end))


def total_cost(records: Iterable, window_from: date, window_to: date, now: date) -> int:
    """Sum ``price * overlap_months`` for every record.

    ``records`` can be ORM objects or result rows; only ``price``,
    ``start_date`` and ``end_date`` are read.
    """
    if window_from > window_to:
        raise ValueError("from must be before or equal to to")

    total = 0
    for record in records:
        months = overlap_months(record.start_date, record.end_date, window_from, window_to, now)
        total += record.price * months
    return total
