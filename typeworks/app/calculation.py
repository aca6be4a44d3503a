# app/calculation.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from typeworks.app.settings import DEFAULT_SETTINGS, EngineSettings
from typeworks.services.language import Language
from typeworks.services.typing_engine import AlignmentResult

CHARS_PER_WORD = 5.0


@dataclass(frozen=True)
class SessionStats:
    speed: float
    accuracy: float
    typed_count: int
    total_count: int
    elapsed_time: float

    @property
    def progress(self) -> float:
        """Percent of the text covered so far."""
        if self.total_count <= 0:
            return 0.0
        return 100.0 * self.typed_count / self.total_count


def elapsed_seconds(accumulated_ms: float, segment_ms: float = 0.0) -> float:
    return (accumulated_ms + segment_ms) / 1000.0


def accuracy(mistakes: int, attempted: int) -> float:
    if attempted <= 0:
        return 100.0
    return max(0.0, 100.0 - (mistakes / attempted) * 100.0)


def speed(
    result: AlignmentResult,
    seconds: float,
    keystrokes: int,
    language: Union[Language, str],
) -> float:
    """
    Korean: raw keystrokes per minute (one syllable takes several keys).
    English: WPM = (correct chars / 5) / minutes.
    """
    if seconds <= 0:
        return 0.0
    if Language(language) is Language.KOREAN:
        return (keystrokes / seconds) * 60.0
    return (result.correct_count / CHARS_PER_WORD) / (seconds / 60.0)


def derive_stats(
    result: AlignmentResult,
    seconds: float,
    keystrokes: int,
    language: Union[Language, str],
    settings: Optional[EngineSettings] = None,
) -> Optional[SessionStats]:
    """
    Statistics for one alignment. Returns None while no meaningful time has
    passed; callers skip the update in that case.
    """
    settings = settings or DEFAULT_SETTINGS
    if seconds <= settings.min_elapsed_seconds:
        return None

    spd = min(speed(result, seconds, keystrokes, language), settings.speed_cap)
    acc = accuracy(len(result.mistakes), result.positions_reached)
    typed = min(result.chars_reached, result.total_count)
    return SessionStats(
        speed=spd,
        accuracy=acc,
        typed_count=typed,
        total_count=result.total_count,
        elapsed_time=seconds,
    )


def resting_stats(result: AlignmentResult, seconds: float = 0.0) -> SessionStats:
    """Stats with no speed, for before the clock runs or for a zero-time finish."""
    return SessionStats(
        speed=0.0,
        accuracy=accuracy(len(result.mistakes), result.positions_reached),
        typed_count=min(result.chars_reached, result.total_count),
        total_count=result.total_count,
        elapsed_time=max(0.0, seconds),
    )


class SpeedSmoother:
    """Exponential moving average over live speed samples."""

    def __init__(self, factor: float = 0.2):
        self.factor = factor
        self.last: Optional[float] = None

    def reset(self):
        self.last = None

    def update(self, value: float) -> float:
        if self.last is None or self.last == 0:
            self.last = value
        else:
            self.last = self.factor * value + (1 - self.factor) * self.last
        return self.last
