import os
import sys
from pathlib import Path

HOME_ENV = "CALENDARVIEW_HOME"


def app_root() -> Path:
    """Return the directory that holds writable app data.

    ``CALENDARVIEW_HOME`` wins when set. When frozen by PyInstaller this is
    the folder next to the executable; during development, the repo root.
    """
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    if getattr(sys, "frozen", False):
        try:
            exe_dir = Path(sys.executable).resolve().parent
            if exe_dir.exists():
                return exe_dir
        except Exception:
            pass
    return Path(__file__).resolve().parents[1]


def user_file(name: str) -> Path:
    return app_root() / name


def ensure_parent(path: Path) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except Exception:
        pass
    return path
