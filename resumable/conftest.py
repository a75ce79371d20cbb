import os
from threading import Thread
from time import sleep

import pytest

from .computation import Computation
from .event import ComputationEvent


def pytest_sessionstart(session):
    """Ensure the test suite always exits."""
    timeout = float(session.config.getini("timeout")) + 5
    Thread(target=lambda: sleep(timeout) or os._exit(1), daemon=True).start()


@pytest.fixture(autouse=True)
def raise_faults(monkeypatch):
    """Make body faults raise instead of aborting the test process."""
    monkeypatch.setenv("RESUMABLE_FAULT", "raise")


@pytest.fixture
def events():
    """Record every computation event published during the test."""
    recorded: list[ComputationEvent] = []
    with Computation.observer(recorded.append):
        yield recorded
