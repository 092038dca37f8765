from __future__ import annotations

from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime, str]


def to_calendar_date(value: DateLike) -> date:
    """
    Normalize a host value to a plain ``date``.

    ``datetime`` values keep their wall-clock year/month/day; the time of day
    and any tzinfo are dropped without conversion. ISO ``YYYY-MM-DD`` strings
    are accepted for values read back from the settings file.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, value.day)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def month_start(value: DateLike) -> date:
    d = to_calendar_date(value)
    return d.replace(day=1)


def add_months(value: DateLike, months: int) -> date:
    """First day of the month ``months`` away from the month of ``value``."""
    d = to_calendar_date(value)
    index = d.year * 12 + (d.month - 1) + int(months)
    return date(index // 12, index % 12 + 1, 1)


def months_between(start: DateLike, end: DateLike) -> int:
    a = to_calendar_date(start)
    b = to_calendar_date(end)
    return (b.year - a.year) * 12 + (b.month - a.month)
