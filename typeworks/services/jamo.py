# services/jamo.py
"""
Hangul syllable decomposition.

A syllable block is split into its base jamo in typing order:
initial -> medial -> final, with compound vowels and consonant clusters
expanded into the two keys that produce them on a 2-set keyboard.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

HANGUL_BASE = 0xAC00
HANGUL_END = 0xD7A3

INITIALS = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)
MEDIALS = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ", "ㅗ", "ㅘ", "ㅙ",
    "ㅚ", "ㅛ", "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ", "ㅡ", "ㅢ", "ㅣ",
)
FINALS = (
    "", "ㄱ", "ㄲ", "ㄳ", "ㄴ", "ㄵ", "ㄶ", "ㄷ", "ㄹ", "ㄺ", "ㄻ", "ㄼ", "ㄽ", "ㄾ",
    "ㄿ", "ㅀ", "ㅁ", "ㅂ", "ㅄ", "ㅅ", "ㅆ", "ㅇ", "ㅈ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

COMPOUND_MEDIALS: Dict[str, Tuple[str, str]] = {
    "ㅘ": ("ㅗ", "ㅏ"), "ㅙ": ("ㅗ", "ㅐ"), "ㅚ": ("ㅗ", "ㅣ"),
    "ㅝ": ("ㅜ", "ㅓ"), "ㅞ": ("ㅜ", "ㅔ"), "ㅟ": ("ㅜ", "ㅣ"),
    "ㅢ": ("ㅡ", "ㅣ"),
}

COMPOUND_FINALS: Dict[str, Tuple[str, str]] = {
    "ㄳ": ("ㄱ", "ㅅ"), "ㄵ": ("ㄴ", "ㅈ"), "ㄶ": ("ㄴ", "ㅎ"),
    "ㄺ": ("ㄹ", "ㄱ"), "ㄻ": ("ㄹ", "ㅁ"), "ㄼ": ("ㄹ", "ㅂ"), "ㄽ": ("ㄹ", "ㅅ"),
    "ㄾ": ("ㄹ", "ㅌ"), "ㄿ": ("ㄹ", "ㅍ"), "ㅀ": ("ㄹ", "ㅎ"), "ㅄ": ("ㅂ", "ㅅ"),
}

# Dubeolsik (2-set) layout, jamo -> QWERTY key.
JAMO_TO_KEY: Dict[str, str] = {
    "ㄱ": "r", "ㄲ": "R", "ㄴ": "s", "ㄷ": "e", "ㄸ": "E", "ㄹ": "f", "ㅁ": "a",
    "ㅂ": "q", "ㅃ": "Q", "ㅅ": "t", "ㅆ": "T", "ㅇ": "d", "ㅈ": "w", "ㅉ": "W",
    "ㅊ": "c", "ㅋ": "z", "ㅌ": "x", "ㅍ": "v", "ㅎ": "g",
    "ㅏ": "k", "ㅐ": "o", "ㅑ": "i", "ㅒ": "O", "ㅓ": "j", "ㅔ": "p", "ㅕ": "u",
    "ㅖ": "P", "ㅗ": "h", "ㅘ": "hk", "ㅙ": "ho", "ㅚ": "hl", "ㅛ": "y", "ㅜ": "n",
    "ㅝ": "nj", "ㅞ": "np", "ㅟ": "nl", "ㅠ": "b", "ㅡ": "m", "ㅢ": "ml", "ㅣ": "l",
}


def is_syllable(ch: str) -> bool:
    return len(ch) == 1 and HANGUL_BASE <= ord(ch) <= HANGUL_END


def decompose(ch: str) -> Tuple[str, ...]:
    """Split one character into its base jamo, in typing order."""
    if not ch:
        return ()
    ch = ch[0]
    code = ord(ch)

    if HANGUL_BASE <= code <= HANGUL_END:
        offset = code - HANGUL_BASE
        initial = INITIALS[offset // 588]
        medial = MEDIALS[(offset % 588) // 28]
        final = FINALS[offset % 28]

        out = [initial]
        out.extend(COMPOUND_MEDIALS.get(medial, (medial,)))
        if final:
            out.extend(COMPOUND_FINALS.get(final, (final,)))
        return tuple(out)

    if ch in COMPOUND_MEDIALS:
        return COMPOUND_MEDIALS[ch]
    if ch in COMPOUND_FINALS:
        return COMPOUND_FINALS[ch]
    return (ch,)


class JamoCache:
    """Memo for ``decompose`` keyed by character value."""

    def __init__(self):
        self._memo: Dict[str, Tuple[str, ...]] = {}

    def decompose(self, ch: str) -> Tuple[str, ...]:
        if not ch:
            return ()
        hit = self._memo.get(ch)
        if hit is None:
            hit = self._memo[ch] = decompose(ch)
        return hit

    def clear(self):
        self._memo.clear()

    def __len__(self) -> int:
        return len(self._memo)


def first_input_key(ch: str, cache: Optional[JamoCache] = None) -> str:
    """Physical key that starts typing ``ch``; the character itself if unmapped."""
    jamos = cache.decompose(ch) if cache else decompose(ch)
    if not jamos:
        return ch
    return JAMO_TO_KEY.get(jamos[0], ch)


def is_jamo_prefix(
    composing: str,
    target: str,
    next_target: Optional[str] = None,
    cache: Optional[JamoCache] = None,
) -> bool:
    """
    True if ``composing`` can still grow into ``target``.

    When the composing character carries more jamo than ``target`` (the IME
    pulled the next syllable's initial into this block), the surplus has to
    start ``next_target``.
    """
    if not composing or not target:
        return True
    if composing == target:
        return True

    split = cache.decompose if cache else decompose
    have = split(composing)
    want = split(target)

    shared = min(len(have), len(want))
    if have[:shared] != want[:shared]:
        return False

    if len(have) > len(want):
        if not next_target:
            return False
        extra = have[len(want):]
        nxt = split(next_target)
        return nxt[:len(extra)] == extra

    return True
