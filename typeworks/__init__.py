"""Typing-practice engine: input alignment, Hangul jamo model and session stats."""
from typeworks.app.calculation import SessionStats, derive_stats
from typeworks.app.settings import EngineSettings, load_settings
from typeworks.services.jamo import JamoCache, decompose, first_input_key
from typeworks.services.language import Language, classify
from typeworks.services.typing_engine import Aligner, AlignmentResult, UserChar, align

__version__ = "0.1.0"

__all__ = [
    "Aligner",
    "AlignmentResult",
    "EngineSettings",
    "JamoCache",
    "Language",
    "SessionStats",
    "UserChar",
    "align",
    "classify",
    "decompose",
    "derive_stats",
    "first_input_key",
    "load_settings",
]
