from dataclasses import dataclass, asdict, fields
from typing import List, Optional
from pathlib import Path
import json

from .app_paths import user_file, ensure_parent
from .month_layout import CalendarMetrics


# Persisted UI state for the calendar window
@dataclass
class CalendarSettings:
    # Number of months shown after the current one
    display_months: int = 24
    preview_days: bool = True
    # Sun-Sat; None uses the built-in single-letter labels
    weekday_labels: Optional[List[str]] = None
    month_header_height: int = 60
    weekday_row_height: int = 50
    week_row_height: int = 40
    # Restore the last selection on launch
    remember_selection: bool = False
    last_selection_start: Optional[str] = None
    last_selection_end: Optional[str] = None


_state = CalendarSettings()


def _state_path() -> Path:
    return user_file("user_settings.json")


_POSITIVE = {"month_header_height", "weekday_row_height", "week_row_height"}
_NON_NEGATIVE = {"display_months"}


def _clean_value(name: str, value, default):
    """Coerce a stored value to the type of its default; None means use the default."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        return None
    if isinstance(default, int):
        if isinstance(value, bool):
            return None
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        if name in _POSITIVE and number <= 0:
            return None
        if name in _NON_NEGATIVE and number < 0:
            return None
        return number
    if name == "weekday_labels":
        if value is None:
            return None
        if isinstance(value, list) and all(isinstance(s, str) for s in value):
            return value
        return None
    # Optional ISO date strings
    return value if value is None or isinstance(value, str) else None


def _from_dict(data: dict) -> CalendarSettings:
    defaults = CalendarSettings()
    values = {}
    for f in fields(CalendarSettings):
        # Unknown keys are dropped so older/newer files still load
        if f.name not in data:
            continue
        default = getattr(defaults, f.name)
        cleaned = _clean_value(f.name, data[f.name], default)
        values[f.name] = default if cleaned is None else cleaned
    return CalendarSettings(**values)


def load_state() -> CalendarSettings:
    global _state
    p = _state_path()
    try:
        if p.exists():
            data = json.loads(p.read_text(encoding="utf-8"))
            _state = _from_dict(data if isinstance(data, dict) else {})
        else:
            _state = CalendarSettings()
    except Exception:
        # Corrupt or incompatible; start fresh
        _state = CalendarSettings()
    return _state


def save_state() -> None:
    p = ensure_parent(_state_path())
    try:
        p.write_text(json.dumps(asdict(_state), ensure_ascii=False, indent=2), encoding="utf-8")
    except Exception:
        pass


def state() -> CalendarSettings:
    return _state


def _setting(name: str):
    defaults = CalendarSettings()
    default = getattr(defaults, name)
    cleaned = _clean_value(name, getattr(state(), name), default)
    return default if cleaned is None else cleaned


def display_months() -> int:
    return _setting("display_months")


def metrics() -> CalendarMetrics:
    return CalendarMetrics(
        month_header_height=_setting("month_header_height"),
        weekday_row_height=_setting("weekday_row_height"),
        week_row_height=_setting("week_row_height"),
    )


# Load on import
load_state()
