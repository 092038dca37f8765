from __future__ import annotations

import faulthandler
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional

from .app_paths import user_file, ensure_parent

_log_path: Optional[Path] = None
_previous_hook = None
_fault_file = None


def log_path() -> Path:
    return _log_path if _log_path is not None else user_file("crash.log")


def log_exception(prefix: str, exc_type, exc_value, exc_tb) -> None:
    """Append a stamped traceback to crash.log; failures here are swallowed."""
    stamp = datetime.now().isoformat(timespec="seconds")
    try:
        details = "".join(traceback.format_exception(exc_type, exc_value, exc_tb)).rstrip()
    except Exception:
        details = f"<unformattable {exc_type}>"
    try:
        with ensure_parent(log_path()).open("a", encoding="utf-8") as f:
            f.write(f"=== {prefix} @ {stamp} ===\n{details}\n\n")
    except Exception:
        pass


def _maybe_show_dialog(summary: str) -> None:
    try:
        from PyQt5.QtWidgets import QApplication, QMessageBox

        if QApplication.instance() is None:
            return
        QMessageBox.critical(None, "Calendar Error", f"{summary}\n\nSee {log_path()}")
    except Exception:
        pass


def _excepthook(exc_type, exc_value, exc_tb) -> None:
    log_exception("Unhandled exception", exc_type, exc_value, exc_tb)
    _maybe_show_dialog(f"{exc_type.__name__}: {exc_value}")
    if callable(_previous_hook):
        _previous_hook(exc_type, exc_value, exc_tb)


def install(path: Optional[Path] = None) -> None:
    """Send uncaught exceptions and hard faults to crash.log. Safe to call twice."""
    global _log_path, _previous_hook, _fault_file

    if sys.excepthook is _excepthook:
        return
    if path is not None:
        _log_path = Path(path)
    try:
        _fault_file = ensure_parent(log_path()).open("a", encoding="utf-8")
        faulthandler.enable(_fault_file)
    except Exception:
        _fault_file = None
    _previous_hook = sys.excepthook
    sys.excepthook = _excepthook
