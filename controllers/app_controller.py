from __future__ import annotations

from datetime import date
from typing import Optional

from controllers.selection_controller import SelectionController
from models.calendar_date import add_months
from models.display import validate_weekday_labels
from models.selection import SelectionState
from services import debug_log
from services.config import display_months, metrics, save_state, state
from ui.main_window import MainWindow


class AppController:
    """Top-level coordinator that wires the selection controller to the window."""

    def __init__(self, today: Optional[date] = None):
        self.today = today or date.today()
        self.selection = SelectionController()
        self.window: Optional[MainWindow] = None

    def build_window(self) -> MainWindow:
        st = state()
        window = MainWindow()
        view = window.calendar
        view.set_metrics(metrics())
        view.set_preview_days(bool(st.preview_days))
        view.set_display_range(self.today, add_months(self.today, display_months()))
        if st.weekday_labels:
            try:
                view.set_weekday_labels(validate_weekday_labels(st.weekday_labels))
            except ValueError as ex:
                debug_log.log(f"config: ignoring weekday_labels err={ex}")

        view.day_tapped.connect(self.selection.handle_tap)
        view.day_dragged.connect(self.selection.handle_drag)
        window.clear_requested.connect(self.selection.clear)
        self.selection.selection_changed.connect(window.show_selection)
        self.selection.add_listener(self._remember)

        if st.remember_selection:
            restored = self._restored_selection()
            if not restored.is_empty:
                self.selection.set_selection(restored.start, restored.end)
        window.show_selection(self.selection.state)
        self.window = window
        return window

    def launch(self) -> MainWindow:
        window = self.build_window()
        window.show()
        return window

    def _restored_selection(self) -> SelectionState:
        st = state()
        try:
            return SelectionState.from_dict(
                {"start": st.last_selection_start, "end": st.last_selection_end}
            )
        except (TypeError, ValueError) as ex:
            debug_log.log(f"config: ignoring stored selection err={ex}")
            return SelectionState()

    def _remember(self, selection: SelectionState) -> None:
        st = state()
        if not st.remember_selection:
            return
        data = selection.as_dict()
        st.last_selection_start = data["start"]
        st.last_selection_end = data["end"]
        save_state()
