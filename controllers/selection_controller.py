from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from models.calendar_date import DateLike, to_calendar_date
from models.selection import SelectionChange, SelectionState
from services import debug_log

SelectionListener = Callable[[SelectionState], None]


class SelectionController(QObject):
    """
    Owns the start/end selection of a calendar and applies tap/drag rules.

    Views feed it normalized days through ``handle_tap`` / ``handle_drag`` and
    re-render from ``selection_changed``. Plain callables may subscribe with
    ``add_listener`` when a Qt connection is not convenient.

    Ordering is not repaired: ``start <= end`` holds only as far as the
    transition rules keep it, and ``set_selection`` accepts any pair.
    """

    selection_changed = pyqtSignal(object)  # SelectionState

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._state = SelectionState()
        self._listeners: List[SelectionListener] = []

    # --- Accessors ----------------------------------------------------------
    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def start(self) -> Optional[date]:
        return self._state.start

    @property
    def end(self) -> Optional[date]:
        return self._state.end

    # --- Listeners ----------------------------------------------------------
    def add_listener(self, cb: SelectionListener) -> None:
        self._listeners.append(cb)

    def remove_listener(self, cb: SelectionListener) -> None:
        try:
            self._listeners.remove(cb)
        except ValueError:
            pass

    # --- Transitions --------------------------------------------------------
    def handle_tap(self, day: DateLike) -> SelectionChange:
        d = to_calendar_date(day)
        start, end = self._state.start, self._state.end
        if start is None:
            new = SelectionState(start=d, end=end)
        elif end is None:
            if d <= start:
                new = SelectionState(start=d, end=None)
            else:
                new = SelectionState(start=start, end=d)
        else:
            # A complete range is replaced by a fresh selection
            new = SelectionState(start=d, end=None)
        debug_log.log(f"selection tap day={d} {self._describe(self._state)} -> {self._describe(new)}")
        return self._apply(new, "tap")

    def handle_drag(self, from_day: DateLike, to_day: DateLike) -> Optional[SelectionChange]:
        src = to_calendar_date(from_day)
        dst = to_calendar_date(to_day)
        start, end = self._state.start, self._state.end
        new: Optional[SelectionState] = None
        if start is not None and src == start:
            if end is None or dst < end:
                new = SelectionState(start=dst, end=end)
        elif end is not None and src == end:
            if start is None or dst > start:
                new = SelectionState(start=start, end=dst)

        if new is None or new == self._state:
            debug_log.log(f"selection drag no-op from={src} to={dst} {self._describe(self._state)}")
            return None
        debug_log.log(f"selection drag from={src} to={dst} -> {self._describe(new)}")
        return self._apply(new, "drag")

    def set_selection(self, start: Optional[DateLike], end: Optional[DateLike]) -> SelectionChange:
        new = SelectionState(
            start=to_calendar_date(start) if start is not None else None,
            end=to_calendar_date(end) if end is not None else None,
        )
        debug_log.log(f"selection set -> {self._describe(new)}")
        return self._apply(new, "set")

    def clear(self) -> SelectionChange:
        return self.set_selection(None, None)

    # --- Internals ----------------------------------------------------------
    def _apply(self, new: SelectionState, source: str) -> SelectionChange:
        change = SelectionChange(previous=self._state, current=new, source=source)
        self._state = new
        self._notify(new)
        return change

    def _notify(self, new: SelectionState) -> None:
        self.selection_changed.emit(new)
        for cb in list(self._listeners):
            try:
                cb(new)
            except Exception as ex:
                debug_log.log(f"selection listener failed err={ex}")

    @staticmethod
    def _describe(st: SelectionState) -> str:
        return f"start={st.start} end={st.end}"
