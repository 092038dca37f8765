from datetime import date, datetime

import pytest

from controllers.selection_controller import SelectionController
from models.selection import SelectionState


class Recorder:
    def __init__(self, controller: SelectionController):
        self.signals = []
        self.calls = []
        controller.selection_changed.connect(self.signals.append)
        controller.add_listener(self.calls.append)


@pytest.fixture
def ctl():
    return SelectionController()


def test_new_controller_is_empty(ctl):
    assert ctl.state == SelectionState()
    assert ctl.start is None and ctl.end is None


# --- taps -------------------------------------------------------------------

def test_first_tap_sets_start(ctl, days):
    change = ctl.handle_tap(days[3])
    assert ctl.state == SelectionState(start=days[3], end=None)
    assert change.previous == SelectionState()
    assert change.current == ctl.state
    assert change.source == "tap"


def test_tap_after_start_completes_range(ctl, days):
    ctl.handle_tap(days[2])
    ctl.handle_tap(days[5])
    assert ctl.state == SelectionState(start=days[2], end=days[5])


@pytest.mark.parametrize("offset", [0, -1, -2])
def test_tap_at_or_before_start_moves_start(ctl, days, offset):
    ctl.handle_tap(days[3])
    ctl.handle_tap(days[3 + offset])
    assert ctl.state == SelectionState(start=days[3 + offset], end=None)


@pytest.mark.parametrize("k", [1, 3, 4, 6])
def test_tap_on_complete_range_resets(ctl, days, k):
    ctl.handle_tap(days[2])
    ctl.handle_tap(days[5])
    ctl.handle_tap(days[k])
    assert ctl.state == SelectionState(start=days[k], end=None)


def test_tap_accepts_datetimes_and_drops_time(ctl):
    ctl.handle_tap(datetime(2024, 5, 1, 23, 59))
    ctl.handle_tap(datetime(2024, 5, 1, 0, 1))
    assert ctl.state == SelectionState(start=date(2024, 5, 1), end=None)
    assert type(ctl.start) is date


def test_tap_always_notifies(ctl, days):
    rec = Recorder(ctl)
    ctl.handle_tap(days[3])
    change = ctl.handle_tap(days[3])
    assert not change.changed
    assert rec.signals == [SelectionState(start=days[3]), SelectionState(start=days[3])]
    assert rec.calls == rec.signals


def test_repeated_tap_does_not_change_state(ctl, days):
    ctl.handle_tap(days[3])
    for _ in range(3):
        ctl.handle_tap(days[3])
    assert ctl.state == SelectionState(start=days[3])


# --- drags ------------------------------------------------------------------

@pytest.fixture
def ranged(ctl, days):
    ctl.set_selection(days[2], days[5])
    return ctl


def test_drag_start_inside_range(ranged, days):
    change = ranged.handle_drag(days[2], days[4])
    assert ranged.state == SelectionState(start=days[4], end=days[5])
    assert change.source == "drag"
    assert change.previous == SelectionState(start=days[2], end=days[5])


def test_drag_start_earlier(ranged, days):
    ranged.handle_drag(days[2], days[1])
    assert ranged.state == SelectionState(start=days[1], end=days[5])


@pytest.mark.parametrize("k", [5, 6])
def test_drag_start_onto_or_past_end_is_noop(ranged, days, k):
    rec = Recorder(ranged)
    assert ranged.handle_drag(days[2], days[k]) is None
    assert ranged.state == SelectionState(start=days[2], end=days[5])
    assert rec.signals == [] and rec.calls == []


def test_drag_end_later_and_earlier(ranged, days):
    ranged.handle_drag(days[5], days[6])
    assert ranged.state == SelectionState(start=days[2], end=days[6])
    ranged.handle_drag(days[6], days[3])
    assert ranged.state == SelectionState(start=days[2], end=days[3])


@pytest.mark.parametrize("k", [1, 2])
def test_drag_end_onto_or_before_start_is_noop(ranged, days, k):
    rec = Recorder(ranged)
    assert ranged.handle_drag(days[5], days[k]) is None
    assert ranged.state == SelectionState(start=days[2], end=days[5])
    assert rec.signals == []


@pytest.mark.parametrize("k", [1, 4, 6])
def test_drag_start_is_free_without_end(ctl, days, k):
    ctl.handle_tap(days[3])
    ctl.handle_drag(days[3], days[k])
    assert ctl.state == SelectionState(start=days[k], end=None)


@pytest.mark.parametrize("k", [1, 3, 6])
def test_drag_end_is_free_without_start(ctl, days, k):
    ctl.set_selection(None, days[4])
    ctl.handle_drag(days[4], days[k])
    assert ctl.state == SelectionState(start=None, end=days[k])


def test_stale_anchor_is_noop(ranged, days):
    rec = Recorder(ranged)
    assert ranged.handle_drag(days[3], days[4]) is None
    assert ranged.handle_drag(days[6], days[1]) is None
    assert ranged.state == SelectionState(start=days[2], end=days[5])
    assert rec.signals == []


def test_drag_on_empty_selection_is_noop(ctl, days):
    assert ctl.handle_drag(days[1], days[2]) is None
    assert ctl.state == SelectionState()


def test_guard_failure_does_not_fall_through_to_end(ctl, days):
    # start == end: the anchor matches start, whose guard blocks the move
    ctl.set_selection(days[3], days[3])
    assert ctl.handle_drag(days[3], days[5]) is None
    assert ctl.state == SelectionState(start=days[3], end=days[3])


def test_drag_to_same_day_is_noop(ctl, days):
    ctl.handle_tap(days[3])
    rec = Recorder(ctl)
    assert ctl.handle_drag(days[3], days[3]) is None
    assert rec.signals == []


def test_repeated_noop_drag_is_idempotent(ranged, days):
    for _ in range(3):
        assert ranged.handle_drag(days[2], days[6]) is None
    assert ranged.state == SelectionState(start=days[2], end=days[5])


def test_drag_sequence_follows_live_anchor(ranged, days):
    ranged.handle_drag(days[2], days[3])
    ranged.handle_drag(days[3], days[4])
    # the old anchor is now stale
    assert ranged.handle_drag(days[2], days[1]) is None
    assert ranged.state == SelectionState(start=days[4], end=days[5])


# --- programmatic updates and listeners ---------------------------------------

def test_set_selection_keeps_unordered_pair(ctl, days):
    change = ctl.set_selection(days[5], days[2])
    assert ctl.state == SelectionState(start=days[5], end=days[2])
    assert change.source == "set"


def test_clear(ranged):
    rec = Recorder(ranged)
    change = ranged.clear()
    assert ranged.state.is_empty
    assert change.changed
    assert rec.signals == [SelectionState()]


def test_listener_errors_do_not_block_others(ctl, days):
    seen = []

    def broken(_state):
        raise RuntimeError("boom")

    ctl.add_listener(broken)
    ctl.add_listener(seen.append)
    ctl.handle_tap(days[1])
    assert seen == [SelectionState(start=days[1])]


def test_remove_listener(ctl, days):
    seen = []
    ctl.add_listener(seen.append)
    ctl.remove_listener(seen.append)
    ctl.remove_listener(seen.append)  # unknown listener is ignored
    ctl.handle_tap(days[1])
    assert seen == []


def test_transitions_are_logged(ctl, days, app_home):
    ctl.handle_tap(days[1])
    ctl.handle_drag(days[4], days[5])
    text = (app_home / "debug.log").read_text(encoding="utf-8")
    assert "selection tap" in text
    assert "selection drag no-op" in text
