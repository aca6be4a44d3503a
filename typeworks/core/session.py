# core/session.py
from __future__ import annotations
from dataclasses import replace
from typing import Optional, Union
import logging

from PySide6.QtCore import QObject, Signal, Slot

from typeworks.app.calculation import (
    SessionStats,
    SpeedSmoother,
    derive_stats,
    resting_stats,
)
from typeworks.app.settings import DEFAULT_SETTINGS, EngineSettings
from typeworks.app.state import SessionSnapshot
from typeworks.core.chrono import RealtimeTimer
from typeworks.services.jamo import JamoCache
from typeworks.services.language import Language, classify
from typeworks.services.typing_engine import Aligner, AlignmentResult
from typeworks.services.weakkeys import WeakKeys
from typeworks.utils.text import normalize_text

logger = logging.getLogger(__name__)


class TypingSession(QObject):
    """
    Drives one practice text: feeds every input change to the aligner,
    keeps active time, derives stats and fires completion once.
    """

    statsUpdated = Signal(object)   # SessionStats
    completed = Signal(object)      # SessionStats, final
    firstKey = Signal(str)

    def __init__(
        self,
        text: str = "",
        language: Optional[Union[Language, str]] = None,
        settings: Optional[EngineSettings] = None,
        timer: Optional[RealtimeTimer] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.settings = settings or DEFAULT_SETTINGS
        self.cache = JamoCache()
        self.weak = WeakKeys(self.cache)
        self._smoother = SpeedSmoother(self.settings.speed_smoothing)

        self.timer = timer if timer is not None else RealtimeTimer(tick_ms=100, parent=self)
        self.timer.elapsedChanged.connect(self.on_elapsed_changed)

        self.load(text, language)

    # -------- lifecycle --------
    def load(self, text: str, language: Optional[Union[Language, str]] = None):
        self.text = normalize_text(text)
        if language is None:
            language = classify(self.text, self.settings.sample_size)
        self.language = Language(language)
        self.aligner = Aligner(self.language, self.settings, self.cache)
        logger.info(
            "Loaded %s text (%d chars)", self.language.value, len(self.text)
        )
        self.reset()

    def reset(self):
        self.timer.stop()
        self.user_input = ""
        self.composing = False
        self.keystrokes = 0
        self._carried_seconds = 0.0
        self._finished = False
        self._smoother.reset()
        self.weak.reset()
        self.result = self.aligner.align(self.text, "", False)

    def restore(self, snapshot: SessionSnapshot):
        """Resume from a snapshot; the clock restarts on the next input."""
        self.load(snapshot.text, snapshot.language)
        self.user_input = snapshot.user_input
        self.keystrokes = snapshot.keystrokes
        self._carried_seconds = snapshot.elapsed
        self.result = self.aligner.align(self.text, self.user_input, False)
        logger.info(
            "Restored session at %d/%d", self.result.target_cursor, len(self.text)
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            text=self.text,
            language=self.language,
            user_input=self.user_input,
            keystrokes=self.keystrokes,
            elapsed=self.elapsed(),
        )

    # -------- state --------
    @property
    def is_finished(self) -> bool:
        return self._finished

    @property
    def is_paused(self) -> bool:
        return self.timer.is_paused

    def elapsed(self) -> float:
        if self.timer.is_running or self._finished:
            return self.timer.seconds()
        return self._carried_seconds

    # -------- input --------
    def set_input(self, value: str, composing: bool = False) -> AlignmentResult:
        if self._finished or self.timer.is_paused:
            logger.debug("Input ignored (finished=%s)", self._finished)
            return self.result

        # optional punctuation is never typed; it would shift every later position
        value = "".join(ch for ch in (value or "") if not self.settings.is_optional(ch))
        if value and not self.timer.is_running:
            fresh = not self.user_input and self._carried_seconds == 0
            self.timer.start(self._carried_seconds)
            if fresh:
                self.firstKey.emit(value[0])
                logger.info("Session started")
            else:
                logger.info("Session resumed at %.1f s", self._carried_seconds)

        self.user_input = value
        self.composing = bool(composing) and bool(value)
        self.result = self.aligner.align(self.text, self.user_input, self.composing)
        self._publish()
        return self.result

    def set_composing(self, composing: bool) -> AlignmentResult:
        return self.set_input(self.user_input, composing)

    def note_keystroke(self, key: str):
        if self._finished or self.timer.is_paused or not key:
            return
        if key in self.settings.ignored_keys or self.settings.is_optional(key):
            return
        self.keystrokes += 1

    def pause(self):
        if self.timer.is_running and not self.timer.is_paused:
            self.timer.pause()
            logger.info("Session paused at %.1f s", self.timer.seconds())

    def resume(self):
        if self.timer.is_paused:
            self.timer.resume()
            logger.info("Session resumed")

    # -------- stats --------
    def current_stats(self) -> Optional[SessionStats]:
        return derive_stats(
            self.result, self.elapsed(), self.keystrokes, self.language, self.settings
        )

    def _emit_stats(self):
        stats = self.current_stats()
        if stats is not None:
            self.statsUpdated.emit(replace(stats, speed=self._smoother.update(stats.speed)))

    def _publish(self):
        self._emit_stats()
        if self.result.is_complete:
            self._finish()

    def _finish(self):
        self._finished = True
        self.timer.stop()
        final = self.current_stats() or resting_stats(self.result, self.timer.seconds())
        self.weak.note_alignment(self.result, self.text)
        logger.info(
            "Session complete: speed=%.0f accuracy=%.1f%% in %.1f s",
            final.speed, final.accuracy, final.elapsed_time,
        )
        self.completed.emit(final)

    @Slot(float)
    def on_elapsed_changed(self, secs: float):
        if self._finished or self.timer.is_paused:
            return
        self._emit_stats()
