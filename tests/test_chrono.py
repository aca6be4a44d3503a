from typeworks.app.calculation import elapsed_seconds
from typeworks.core.chrono import RealtimeTimer


def _signals(timer):
    seen = []
    timer.started.connect(lambda: seen.append("started"))
    timer.paused.connect(lambda: seen.append("paused"))
    timer.resumed.connect(lambda: seen.append("resumed"))
    timer.stopped.connect(lambda: seen.append("stopped"))
    return seen


class TestRealtimeTimer:
    def test_idle(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        assert not t.is_running
        assert t.seconds() == 0.0

    def test_lifecycle_signals(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        seen = _signals(t)
        t.start()
        t.pause()
        t.pause()
        t.resume()
        t.stop()
        t.stop()
        assert seen == ["started", "paused", "resumed", "stopped"]

    def test_paused_clock_is_frozen(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        t.start()
        t.pause()
        first = t.seconds()
        assert t.seconds() == first
        assert t.is_paused

    def test_initial_seconds_are_carried(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        t.start(initial_seconds=5.0)
        assert t.seconds() >= 5.0
        t.stop()
        assert t.seconds() >= 5.0
        assert not t.is_running

    def test_paused_seconds_come_from_accumulated_ms(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        t.start(initial_seconds=2.5)
        t.pause()
        assert t.seconds() == elapsed_seconds(t._elapsed_ms)
        assert 2.5 <= t.seconds() < 3.5

    def test_restart_clears_previous_time(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        t.start(initial_seconds=5.0)
        t.stop()
        t.start()
        assert t.seconds() < 5.0

    def test_resume_without_pause_is_noop(self, qapp):
        t = RealtimeTimer(tick_ms=0)
        seen = _signals(t)
        t.resume()
        t.pause()
        assert seen == []
