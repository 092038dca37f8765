from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from models.calendar_date import to_calendar_date


@dataclass(frozen=True)
class SelectionState:
    """Start/end of the current selection. Either side may be absent."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, day: date) -> bool:
        if not self.is_complete:
            return False
        return self.start <= day <= self.end

    def as_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "SelectionState":
        data = data or {}
        start = data.get("start")
        end = data.get("end")
        return cls(
            start=to_calendar_date(start) if start else None,
            end=to_calendar_date(end) if end else None,
        )


@dataclass(frozen=True)
class SelectionChange:
    previous: SelectionState
    current: SelectionState
    source: str  # "tap", "drag" or "set"

    @property
    def changed(self) -> bool:
        return self.previous != self.current


class DayState(Enum):
    NORMAL = "normal"
    SELECTED = "selected"  # equals start or end
    HIGHLIGHTED = "highlighted"  # strictly between start and end
    PREVIEW = "preview"  # adjacent-month filler day


class RangeSelection(Enum):
    """Where a day sits relative to the selection; boundary values are draggable."""

    NONE = "none"
    START = "start"
    START_NO_END = "start_no_end"
    END = "end"
    END_NO_START = "end_no_start"
    INSIDE = "inside"


_BOUNDARY = {
    RangeSelection.START,
    RangeSelection.START_NO_END,
    RangeSelection.END,
    RangeSelection.END_NO_START,
}


def day_state(day: date, selection: SelectionState, in_display_month: bool = True) -> DayState:
    if not in_display_month:
        return DayState.PREVIEW
    if day == selection.start or day == selection.end:
        return DayState.SELECTED
    if selection.is_complete and selection.start < day < selection.end:
        return DayState.HIGHLIGHTED
    return DayState.NORMAL


def range_selection(day: date, selection: SelectionState) -> RangeSelection:
    start, end = selection.start, selection.end
    if start is not None and day == start:
        return RangeSelection.START if end is not None else RangeSelection.START_NO_END
    if end is not None and day == end:
        return RangeSelection.END if start is not None else RangeSelection.END_NO_START
    if selection.is_complete and start < day < end:
        return RangeSelection.INSIDE
    return RangeSelection.NONE


def is_boundary_day(day: date, selection: SelectionState) -> bool:
    return range_selection(day, selection) in _BOUNDARY
