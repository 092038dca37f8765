from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from models.selection import DayState


@dataclass(frozen=True)
class DisplayAttributes:
    """How a day or weekday label is drawn. Colors are Qt color strings."""

    font_family: Optional[str] = None  # None -> application default font
    point_size: int = 15
    bold: bool = False
    text_color: str = "#000000"
    background_color: str = "#ffffff"
    alignment: str = "center"  # left | center | right


@dataclass(frozen=True)
class DayStyles:
    normal: DisplayAttributes = DisplayAttributes()
    selected: DisplayAttributes = DisplayAttributes(
        bold=True, text_color="#ffffff", background_color="#0000ff"
    )
    highlighted: DisplayAttributes = DisplayAttributes(background_color="#aaaaaa")
    # #AARRGGBB: black at 50% alpha
    preview: DisplayAttributes = DisplayAttributes(text_color="#80000000")

    def for_state(self, state: DayState) -> DisplayAttributes:
        return getattr(self, state.value)

    def with_state(self, state: DayState, attrs: DisplayAttributes) -> "DayStyles":
        return replace(self, **{state.value: attrs})


DEFAULT_DAY_STYLES = DayStyles()
DEFAULT_WEEKDAY_ATTRIBUTES = DisplayAttributes(bold=True)
DEFAULT_WEEKDAY_LABELS: Tuple[str, ...] = ("S", "M", "T", "W", "T", "F", "S")


def validate_weekday_labels(labels: Iterable[str]) -> Tuple[str, ...]:
    """Weekday labels run Sunday to Saturday; anything but seven is a caller bug."""
    out = tuple(str(s) for s in labels)
    if len(out) != 7:
        raise ValueError(f"Exactly 7 weekday labels (Sun-Sat) are required, got {len(out)}")
    return out
