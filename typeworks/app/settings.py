# app/settings.py
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple
import json
import logging

from typeworks.app.errors import SettingsError

logger = logging.getLogger(__name__)


# Characters that never have to be typed; they are shown as passed once the
# surrounding word is reached.
OPTIONAL_CHARS: Tuple[str, ...] = (
    ".", "!", "?", "'", '"', ",", ";", ":", "“", "”", "‘", "’", "…",
)

# Keys that never count as a keystroke.
IGNORED_KEYS: Tuple[str, ...] = ("Control", "Alt", "Shift", "Meta", "CapsLock", "Tab")


@dataclass(frozen=True)
class EngineSettings:
    optional_chars: Tuple[str, ...] = OPTIONAL_CHARS
    speed_cap: float = 2500.0
    min_elapsed_seconds: float = 0.1
    sample_size: int = 500
    speed_smoothing: float = 0.2
    ignored_keys: Tuple[str, ...] = IGNORED_KEYS

    def is_optional(self, ch: str) -> bool:
        return ch in self.optional_chars


DEFAULT_SETTINGS = EngineSettings()

_SEQUENCE_KEYS = {"optional_chars", "ignored_keys"}
_FLOAT_KEYS = {"speed_cap", "min_elapsed_seconds", "speed_smoothing"}
_INT_KEYS = {"sample_size"}


# -------- helpers --------
def _coerce(key: str, value: Any) -> Any:
    if key in _SEQUENCE_KEYS:
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise SettingsError(f"{key} must be a list of strings")
        if not all(isinstance(v, str) and v for v in value):
            raise SettingsError(f"{key} must only contain non-empty strings")
        return tuple(value)
    if key in _FLOAT_KEYS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SettingsError(f"{key} must be a number")
        if value < 0:
            raise SettingsError(f"{key} must not be negative")
        return float(value)
    if key in _INT_KEYS:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise SettingsError(f"{key} must be a positive integer")
        return value
    raise SettingsError(f"Unknown setting: {key}")


# -------- public API --------
def settings_from_dict(d: Dict[str, Any], base: EngineSettings = DEFAULT_SETTINGS) -> EngineSettings:
    """
    Build settings from a plain dict (e.g. parsed JSON).
    Keys left out keep the value from ``base``; unknown keys are rejected.
    """
    known = {f.name for f in fields(EngineSettings)}
    unknown = set(d.keys()) - known
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(sorted(unknown))}")
    values = {k: _coerce(k, v) for k, v in d.items()}
    if values.get("speed_smoothing", base.speed_smoothing) > 1.0:
        raise SettingsError("speed_smoothing must be between 0 and 1")
    return replace(base, **values)


def load_settings(path: str | Path) -> EngineSettings:
    """Load settings from a JSON file; a missing file means defaults."""
    p = Path(path)
    if not p.exists():
        logger.warning("Settings file %s not found, using defaults", p)
        return DEFAULT_SETTINGS
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SettingsError(f"Cannot read settings from {p}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Settings in {p} must be a JSON object")
    return settings_from_dict(data)
