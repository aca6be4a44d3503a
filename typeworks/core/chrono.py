# core/chrono.py
from PySide6.QtCore import QObject, QElapsedTimer, QTimer, Signal

from typeworks.app.calculation import elapsed_seconds


class RealtimeTimer(QObject):
    """Accumulates active (unpaused) session time."""

    elapsedChanged = Signal(float)  # seconds (active-time only)
    started = Signal()
    paused = Signal()
    resumed = Signal()
    stopped = Signal()

    def __init__(self, tick_ms: int = 100, parent=None):
        super().__init__(parent)
        self._elapsed_ms = 0.0       # accumulated active time of closed segments
        self._running = False
        self._paused = False
        self._t = QElapsedTimer()

        self._tick = None
        if tick_ms > 0:
            self._tick = QTimer(self)
            self._tick.setInterval(tick_ms)
            self._tick.timeout.connect(self._on_tick)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused

    def start(self, initial_seconds: float = 0.0):
        # initial_seconds lets a restored session keep its earlier active time
        self._elapsed_ms = max(0.0, float(initial_seconds)) * 1000.0
        self._paused = False
        self._running = True
        self._t.start()
        if self._tick is not None:
            self._tick.start()
        self.started.emit()

    def pause(self):
        if self._running and not self._paused:
            self._elapsed_ms += self._t.elapsed()
            self._paused = True
            self.paused.emit()

    def resume(self):
        if self._running and self._paused:
            self._paused = False
            self._t.restart()
            self.resumed.emit()

    def stop(self):
        if self._running:
            if not self._paused:
                self._elapsed_ms += self._t.elapsed()
            self._running = False
            self._paused = False
            if self._tick is not None:
                self._tick.stop()
            self.stopped.emit()

    def seconds(self) -> float:
        if self._running and not self._paused:
            return elapsed_seconds(self._elapsed_ms, self._t.elapsed())
        return elapsed_seconds(self._elapsed_ms)

    def _on_tick(self):
        self.elapsedChanged.emit(self.seconds())
