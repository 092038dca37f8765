from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget

from models.selection import SelectionState
from ui.calendar_view import CalendarView


def describe_selection(selection: SelectionState) -> str:
    start, end = selection.start, selection.end
    if start is None and end is None:
        return "No selection"
    if end is None:
        return f"Start: {start.isoformat()}"
    if start is None:
        return f"End: {end.isoformat()}"
    days = (end - start).days + 1
    return f"{start.isoformat()} – {end.isoformat()} ({days} days)"


class MainWindow(QMainWindow):
    clear_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Calendar")
        self.resize(420, 680)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        self.calendar = CalendarView()
        layout.addWidget(self.calendar, stretch=1)

        footer = QHBoxLayout()
        footer.setContentsMargins(8, 0, 8, 8)
        self.status = QLabel(describe_selection(SelectionState()))
        self.status.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        footer.addWidget(self.status, stretch=1)

        self.bt_clear = QPushButton("Clear")
        self.bt_clear.clicked.connect(self.clear_requested.emit)
        footer.addWidget(self.bt_clear)
        layout.addLayout(footer)

        self.setCentralWidget(central)

    def show_selection(self, selection: SelectionState) -> None:
        self.calendar.set_selection(selection)
        self.status.setText(describe_selection(selection))
        self.bt_clear.setEnabled(not selection.is_empty)
