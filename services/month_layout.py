"""
Month grid generation and vertical layout for the scrolling calendar.

Each displayed month is a section of eight rows: a month title, the weekday
labels, then six week rows. Rows are stacked top to bottom in a single
coordinate space so the view can hit-test a point without asking Qt.
"""

from __future__ import annotations

import bisect
import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from models.calendar_date import DateLike, add_months, month_start, months_between

WEEKS_PER_MONTH = 6
DAYS_PER_WEEK = 7

_CALENDAR = calendar.Calendar(firstweekday=6)  # 6: Sunday


@dataclass(frozen=True)
class CalendarMetrics:
    month_header_height: int = 60
    weekday_row_height: int = 50
    week_row_height: int = 40


class RowKind(Enum):
    MONTH_HEADER = "month_header"
    WEEKDAYS = "weekdays"
    WEEK = "week"


@dataclass(frozen=True)
class LayoutRow:
    kind: RowKind
    month: date
    top: int
    height: int
    week: Optional[int] = None  # 0-5 for WEEK rows
    days: Tuple[Optional[date], ...] = ()

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True)
class DayHit:
    day: date
    month: date
    in_month: bool


def display_months(display_start: DateLike, display_end: DateLike) -> List[date]:
    first = month_start(display_start)
    count = months_between(first, display_end)
    if count < 0:
        raise ValueError(f"Display end {display_end} is before display start {display_start}")
    return [add_months(first, i) for i in range(count + 1)]


def month_weeks(month: DateLike, preview_days: bool = True) -> List[List[Optional[date]]]:
    """Six Sunday-first weeks covering ``month``; adjacent days are None unless previewed."""
    first = month_start(month)
    weeks = _CALENDAR.monthdatescalendar(first.year, first.month)
    # Short months get trailing weeks from the next month so every section is six rows
    while len(weeks) < WEEKS_PER_MONTH:
        weeks.append([d + timedelta(days=DAYS_PER_WEEK) for d in weeks[-1]])
    if preview_days:
        return weeks
    return [[d if d.month == first.month else None for d in week] for week in weeks]


def build_rows(
    months: Sequence[date],
    metrics: CalendarMetrics = CalendarMetrics(),
    preview_days: bool = True,
) -> List[LayoutRow]:
    rows: List[LayoutRow] = []
    y = 0
    for month in months:
        rows.append(LayoutRow(RowKind.MONTH_HEADER, month, y, metrics.month_header_height))
        y += metrics.month_header_height
        rows.append(LayoutRow(RowKind.WEEKDAYS, month, y, metrics.weekday_row_height))
        y += metrics.weekday_row_height
        for i, week in enumerate(month_weeks(month, preview_days)):
            rows.append(
                LayoutRow(RowKind.WEEK, month, y, metrics.week_row_height, week=i, days=tuple(week))
            )
            y += metrics.week_row_height
    return rows


def total_height(rows: Sequence[LayoutRow]) -> int:
    return rows[-1].bottom if rows else 0


def row_at(rows: Sequence[LayoutRow], y: float) -> Optional[LayoutRow]:
    if not rows or y < 0 or y >= total_height(rows):
        return None
    tops = [r.top for r in rows]
    idx = bisect.bisect_right(tops, y) - 1
    if idx < 0:
        return None
    row = rows[idx]
    # zero-height rows can share a top with the next row
    return row if row.top <= y < row.bottom else None


def column_at(x: float, width: int) -> Optional[int]:
    if width <= 0 or x < 0 or x >= width:
        return None
    return min(DAYS_PER_WEEK - 1, int(x * DAYS_PER_WEEK // width))


def day_at(rows: Sequence[LayoutRow], x: float, y: float, width: int) -> Optional[DayHit]:
    row = row_at(rows, y)
    if row is None or row.kind is not RowKind.WEEK:
        return None
    col = column_at(x, width)
    if col is None:
        return None
    day = row.days[col]
    if day is None:
        return None
    return DayHit(day=day, month=row.month, in_month=day.month == row.month.month)


def month_top(rows: Sequence[LayoutRow], month: DateLike) -> Optional[int]:
    target = month_start(month)
    for row in rows:
        if row.kind is RowKind.MONTH_HEADER and row.month == target:
            return row.top
    return None
