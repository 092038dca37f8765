from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from .app_paths import ensure_parent, user_file

_log_lock = threading.Lock()
_log_path: Optional[Path] = None


def log_path() -> Path:
    return _log_path if _log_path is not None else user_file("debug.log")


def set_log_path(path: Optional[Path]) -> None:
    """Redirect the log; ``None`` restores the default under the app root."""
    global _log_path
    _log_path = Path(path) if path is not None else None


def log(message: str) -> None:
    """Append a timestamped, thread-tagged message to debug.log (best effort)."""
    try:
        line = f"{datetime.now().isoformat()} [{threading.current_thread().name}] {message}\n"
        with _log_lock:
            p = ensure_parent(log_path())
            with p.open("a", encoding="utf-8") as f:
                f.write(line)
    except Exception:
        pass
