"""Shared fixtures: offscreen Qt and a throwaway data directory per test."""

import os
import tempfile

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("CALENDARVIEW_HOME", tempfile.mkdtemp(prefix="calendarview_test_"))

from datetime import date

import pytest
from PyQt5.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def app_home(tmp_path, monkeypatch):
    monkeypatch.setenv("CALENDARVIEW_HOME", str(tmp_path))
    from services import config, debug_log

    debug_log.set_log_path(None)
    config.load_state()
    yield tmp_path


@pytest.fixture
def days():
    """A handful of ordered days: d[1] < d[2] < ... < d[6]."""
    return {i: date(2024, 3, 4 + i) for i in range(1, 7)}
