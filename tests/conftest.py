"""Shared fixtures for pingprobe tests."""

import os
import time

# Must be set before the QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from pingprobe.models import TickId
from pingprobe.transport import ACK_BODY, Transport


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeClock:
    """Settable epoch-millisecond clock."""

    def __init__(self, now_ms: int = 0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


class ManualTransport(Transport):
    """Transport that records dispatches and acknowledges only on request."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.dispatched = []

    @property
    def sent_times(self):
        return [tick_id.sent_at_ms for tick_id in self.dispatched]

    def dispatch(self, payload) -> None:
        self.dispatched.append(payload)

    def resolve(self, payload):
        """Map a bare sent_at_ms to the latest tick dispatched at that time."""
        if isinstance(payload, TickId):
            return payload
        for tick_id in reversed(self.dispatched):
            if tick_id.sent_at_ms == payload:
                return tick_id
        return TickId(payload, -1)

    def ack(self, payload, body: str = ACK_BODY):
        self.acknowledged.emit(self.resolve(payload), body)

    def fail(self, payload, message: str = "connection refused"):
        self.failed.emit(self.resolve(payload), message)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport():
    return ManualTransport()


@pytest.fixture
def wait_for():
    """Process Qt events until predicate() holds or timeout expires."""

    def wait(predicate, timeout_s: float = 2.0):
        deadline = time.monotonic() + timeout_s
        while not predicate() and time.monotonic() < deadline:
            QCoreApplication.processEvents()
            time.sleep(0.005)
        return predicate()

    return wait
