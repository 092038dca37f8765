from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Callable, Optional

from PyQt5.QtCore import QPoint, QRect, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QFont, QPainter
from PyQt5.QtWidgets import QApplication, QFrame, QScrollArea, QSizePolicy, QWidget

from models.calendar_date import DateLike, month_start, to_calendar_date
from models.display import (
    DEFAULT_DAY_STYLES,
    DEFAULT_WEEKDAY_ATTRIBUTES,
    DEFAULT_WEEKDAY_LABELS,
    DayStyles,
    DisplayAttributes,
    validate_weekday_labels,
)
from models.selection import DayState, RangeSelection, SelectionState, day_state, range_selection
from services import month_layout
from services.month_layout import CalendarMetrics, DayHit, LayoutRow, RowKind

MonthTitleProvider = Callable[[date], str]

_ALIGN = {
    "left": Qt.AlignLeft | Qt.AlignVCenter,
    "center": Qt.AlignCenter,
    "right": Qt.AlignRight | Qt.AlignVCenter,
}

DEFAULT_MONTH_TITLE_ATTRIBUTES = DisplayAttributes(point_size=17, bold=True)


def default_month_title(month: date) -> str:
    return month.strftime("%B %Y")


class PanMode(Enum):
    NONE = 0
    START = 1
    END = 2


class CalendarCanvas(QWidget):
    """Paints every month section and turns mouse input into tap/drag signals."""

    day_tapped = pyqtSignal(object)  # date
    day_dragged = pyqtSignal(object, object)  # anchor date, date under pointer

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        today = date.today()
        self._display_start = month_start(today)
        self._display_end = month_start(today)
        self._preview_days = True
        self._metrics = CalendarMetrics()
        self._styles: DayStyles = DEFAULT_DAY_STYLES
        self._weekday_attrs = DEFAULT_WEEKDAY_ATTRIBUTES
        self._title_attrs = DEFAULT_MONTH_TITLE_ATTRIBUTES
        self._weekday_labels = DEFAULT_WEEKDAY_LABELS
        self._title_provider: MonthTitleProvider = default_month_title
        self._selection = SelectionState()
        self._rows = []

        # Gesture state
        self._pan_mode = PanMode.NONE
        self._press_pos: Optional[QPoint] = None
        self._press_day: Optional[date] = None
        self._dragging = False
        self._last_drag_day: Optional[date] = None

        self._relayout()

    # --- Configuration ------------------------------------------------------
    @property
    def display_start(self) -> date:
        return self._display_start

    @property
    def display_end(self) -> date:
        return self._display_end

    def set_display_range(self, start: DateLike, end: DateLike) -> None:
        # Validate before touching state so a bad range leaves the view intact
        month_layout.display_months(start, end)
        self._display_start = month_start(start)
        self._display_end = month_start(end)
        self._relayout()

    def set_preview_days(self, enabled: bool) -> None:
        self._preview_days = bool(enabled)
        self._relayout()

    def set_metrics(self, metrics: CalendarMetrics) -> None:
        self._metrics = metrics
        self._relayout()

    def set_day_styles(self, styles: DayStyles) -> None:
        self._styles = styles
        self.update()

    def set_display_attributes(self, attrs: DisplayAttributes, state: DayState) -> None:
        self._styles = self._styles.with_state(state, attrs)
        self.update()

    def set_weekday_attributes(self, attrs: DisplayAttributes) -> None:
        self._weekday_attrs = attrs
        self.update()

    def set_month_title_attributes(self, attrs: DisplayAttributes) -> None:
        self._title_attrs = attrs
        self.update()

    def set_weekday_labels(self, labels) -> None:
        self._weekday_labels = validate_weekday_labels(labels)
        self.update()

    def set_month_title_provider(self, provider: Optional[MonthTitleProvider]) -> None:
        self._title_provider = provider or default_month_title
        self.update()

    def set_selection(self, selection: SelectionState) -> None:
        self._selection = selection or SelectionState()
        self.update()

    def day_styles(self) -> DayStyles:
        return self._styles

    def weekday_labels(self):
        return self._weekday_labels

    def selection(self) -> SelectionState:
        return self._selection

    def _relayout(self) -> None:
        months = month_layout.display_months(self._display_start, self._display_end)
        self._rows = month_layout.build_rows(months, self._metrics, self._preview_days)
        self.setFixedHeight(month_layout.total_height(self._rows))
        self.update()

    # --- Geometry -----------------------------------------------------------
    def hit_test(self, pos: QPoint) -> Optional[DayHit]:
        return month_layout.day_at(self._rows, pos.x(), pos.y(), self.width())

    def cell_rect(self, day: DateLike, in_month: bool = True) -> Optional[QRect]:
        """Rect of ``day`` inside its own month section (or its preview cell)."""
        d = to_calendar_date(day)
        for row in self._rows:
            if row.kind is not RowKind.WEEK or d not in row.days:
                continue
            if (d.month == row.month.month) != in_month:
                continue
            return self._column_rect(row, row.days.index(d))
        return None

    def month_top(self, month: DateLike) -> Optional[int]:
        return month_layout.month_top(self._rows, month)

    def _column_rect(self, row: LayoutRow, col: int) -> QRect:
        w = self.width()
        x0 = col * w // month_layout.DAYS_PER_WEEK
        x1 = (col + 1) * w // month_layout.DAYS_PER_WEEK
        return QRect(x0, row.top, x1 - x0, row.height)

    # --- Painting -----------------------------------------------------------
    def paintEvent(self, event):
        clip = event.rect()
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        try:
            for row in self._rows:
                if row.bottom < clip.top() or row.top > clip.bottom():
                    continue
                if row.kind is RowKind.MONTH_HEADER:
                    rect = QRect(0, row.top, self.width(), row.height)
                    self._draw_text(painter, rect, self._title_provider(row.month), self._title_attrs)
                elif row.kind is RowKind.WEEKDAYS:
                    for col, label in enumerate(self._weekday_labels):
                        self._draw_text(painter, self._column_rect(row, col), label, self._weekday_attrs)
                else:
                    self._paint_week(painter, row)
        finally:
            painter.end()

    def _paint_week(self, painter: QPainter, row: LayoutRow) -> None:
        for col, day in enumerate(row.days):
            rect = self._column_rect(row, col)
            if day is None:
                painter.fillRect(rect, QColor(self._styles.normal.background_color))
                continue
            st = day_state(day, self._selection, in_display_month=day.month == row.month.month)
            self._draw_text(painter, rect, str(day.day), self._styles.for_state(st))

    def _draw_text(self, painter: QPainter, rect: QRect, text: str, attrs: DisplayAttributes) -> None:
        painter.fillRect(rect, QColor(attrs.background_color))
        font = QFont(attrs.font_family) if attrs.font_family else QFont(self.font())
        font.setPointSize(int(attrs.point_size))
        font.setBold(bool(attrs.bold))
        painter.setFont(font)
        painter.setPen(QColor(attrs.text_color))
        painter.drawText(rect, int(_ALIGN.get(attrs.alignment, Qt.AlignCenter)), text)

    # --- Gestures -----------------------------------------------------------
    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self._reset_gesture()
        hit = self.hit_test(event.pos())
        if hit is None or not hit.in_month:
            return
        self._press_pos = QPoint(event.pos())
        self._press_day = hit.day
        self._last_drag_day = hit.day
        rs = range_selection(hit.day, self._selection)
        if rs in (RangeSelection.START, RangeSelection.START_NO_END):
            self._pan_mode = PanMode.START
        elif rs in (RangeSelection.END, RangeSelection.END_NO_START):
            self._pan_mode = PanMode.END
        event.accept()

    def mouseMoveEvent(self, event):
        if self._press_day is None or self._pan_mode is PanMode.NONE:
            super().mouseMoveEvent(event)
            return
        if not self._dragging:
            moved = (event.pos() - self._press_pos).manhattanLength()
            if moved < QApplication.startDragDistance():
                return
            self._dragging = True
        hit = self.hit_test(event.pos())
        # Preview cells are valid drop targets; only presses on them are ignored
        if hit is None or hit.day == self._last_drag_day:
            return
        self._last_drag_day = hit.day
        # Anchor follows the live selection, which moves as drag steps apply
        anchor = self._selection.start if self._pan_mode is PanMode.START else self._selection.end
        if anchor is not None:
            self.day_dragged.emit(anchor, hit.day)
        event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton or self._press_day is None:
            super().mouseReleaseEvent(event)
            return
        tapped = None
        if not self._dragging:
            hit = self.hit_test(event.pos())
            if hit is not None and hit.in_month and hit.day == self._press_day:
                tapped = hit.day
        self._reset_gesture()
        if tapped is not None:
            self.day_tapped.emit(tapped)
        event.accept()

    def is_dragging(self) -> bool:
        return self._dragging

    def _reset_gesture(self) -> None:
        self._pan_mode = PanMode.NONE
        self._press_pos = None
        self._press_day = None
        self._dragging = False
        self._last_drag_day = None


class CalendarView(QScrollArea):
    """Vertically scrolling month-by-month calendar with range selection gestures."""

    day_tapped = pyqtSignal(object)
    day_dragged = pyqtSignal(object, object)

    def __init__(self, start: Optional[DateLike] = None, end: Optional[DateLike] = None, parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.NoFrame)
        self.setWidgetResizable(True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)

        self.canvas = CalendarCanvas()
        self.canvas.day_tapped.connect(self.day_tapped.emit)
        self.canvas.day_dragged.connect(self.day_dragged.emit)
        self.setWidget(self.canvas)

        if start is not None or end is not None:
            today = date.today()
            self.set_display_range(start if start is not None else today, end if end is not None else start)

    def set_display_range(self, start: DateLike, end: DateLike) -> None:
        self.canvas.set_display_range(start, end)

    def display_start(self) -> date:
        return self.canvas.display_start

    def display_end(self) -> date:
        return self.canvas.display_end

    def set_preview_days(self, enabled: bool) -> None:
        self.canvas.set_preview_days(enabled)

    def set_metrics(self, metrics: CalendarMetrics) -> None:
        self.canvas.set_metrics(metrics)

    def set_day_styles(self, styles: DayStyles) -> None:
        self.canvas.set_day_styles(styles)

    def set_display_attributes(self, attrs: DisplayAttributes, state: DayState) -> None:
        self.canvas.set_display_attributes(attrs, state)

    def set_weekday_attributes(self, attrs: DisplayAttributes) -> None:
        self.canvas.set_weekday_attributes(attrs)

    def set_weekday_labels(self, labels) -> None:
        self.canvas.set_weekday_labels(labels)

    def set_month_title_provider(self, provider: Optional[MonthTitleProvider]) -> None:
        self.canvas.set_month_title_provider(provider)

    def set_selection(self, selection: SelectionState) -> None:
        self.canvas.set_selection(selection)

    def scroll_to_month(self, month: DateLike) -> bool:
        top = self.canvas.month_top(month)
        if top is None:
            return False
        self.verticalScrollBar().setValue(top)
        return True
