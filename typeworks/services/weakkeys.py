# services/weakkeys.py
from collections import Counter
from typing import List, Optional, Tuple

from typeworks.services.jamo import JamoCache, first_input_key
from typeworks.services.typing_engine import AlignmentResult


class WeakKeys:
    """Per-key weakness score, keyed by the physical key that starts a character."""

    def __init__(self, cache: Optional[JamoCache] = None):
        self.counts = Counter()
        self.cache = cache or JamoCache()

    def note(self, ch: str, correct: bool):
        if not ch or ch.isspace():
            return
        key = first_input_key(ch, self.cache)
        if key == ch:
            # unmapped (Latin) keys fold case; dubeolsik keys keep Shift (ㄲ is R, ㄱ is r)
            key = key.lower()
        # increment “weakness” on mistakes more than on correct
        self.counts[key] += 2 if not correct else 0.5

    def note_alignment(self, result: AlignmentResult, target: str):
        # score against the expected character: the key the user should have hit
        for pos, uc in sorted(result.user_chars.items()):
            expected = target[pos] if pos < len(target) else uc.display_char
            self.note(expected, not uc.is_mistake)

    def reset(self):
        self.counts.clear()

    def snapshot(self) -> dict:
        return dict(self.counts)

    def ranked(self) -> List[Tuple[str, float]]:
        return sorted(self.counts.items(), key=lambda kv: (-kv[1], kv[0]))
