import pytest
from PySide6.QtCore import QCoreApplication

from typeworks.app.calculation import elapsed_seconds
from typeworks.core.chrono import RealtimeTimer


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeTimer(RealtimeTimer):
    """RealtimeTimer whose clock is set by hand."""

    def __init__(self):
        super().__init__(tick_ms=0)
        self.now = 0.0

    def start(self, initial_seconds: float = 0.0):
        super().start(initial_seconds)
        self.now = elapsed_seconds(self._elapsed_ms)

    def seconds(self) -> float:
        return self.now

    def advance(self, secs: float):
        if self.is_running and not self.is_paused:
            self.now += secs


@pytest.fixture
def fake_timer(qapp):
    return FakeTimer()
