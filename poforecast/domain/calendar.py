"""Calendar-month arithmetic on first-of-month dates.

Every monthly series in the domain is keyed by the first day of its month.
These helpers normalise arbitrary dates to that key and step between keys
without pulling in a date library.
"""

from __future__ import annotations

from datetime import date, datetime


def month_start(value: date | datetime) -> date:
    """Return the first day of the month containing value."""
    return date(value.year, value.month, 1)


def add_months(month: date, months: int) -> date:
    """Shift a month key by a (possibly negative) number of months.

    The day component is dropped: the result is always a first-of-month date.
    """
    index = month.year * 12 + (month.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end (negative when end precedes start)."""
    return (end.year - start.year) * 12 + (end.month - start.month)
