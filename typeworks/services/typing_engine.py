# services/typing_engine.py
"""
Input alignment.

The whole input is re-aligned against the target on every change, from
position 0, in a single forward pass. Backspace needs no undo logic: a shorter
input simply produces an earlier result.

Each input character produces exactly one transition (see ``Aligner.step``):

    LineBreakAdvance   space/enter where the line ends -> jump past the newlines
    WordBreakAdvance   space/enter on a word boundary  -> step over it
    MismatchedBreak    space/enter anywhere else       -> mistake, one position
    BodyMatch          character accepted at the cursor
    BodyMismatch       character rejected, one position consumed
    TrailingOverflow   input past the end of the target
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Set, Tuple, Union
import logging

from typeworks.app.settings import DEFAULT_SETTINGS, EngineSettings
from typeworks.services.jamo import JamoCache, is_jamo_prefix, is_syllable
from typeworks.services.language import Language, classify
from typeworks.utils.text import countable_length

logger = logging.getLogger(__name__)

BREAK_CHARS = (" ", "\n")


def is_body_char(ch: str) -> bool:
    """Letters, digits and Hangul syllables: the characters that must be typed."""
    return len(ch) == 1 and ((ch.isascii() and ch.isalnum()) or is_syllable(ch))


@dataclass(frozen=True)
class UserChar:
    display_char: str
    is_mistake: bool


# -------- transitions --------
@dataclass(frozen=True)
class LineBreakAdvance:
    position: int
    newline_at: int


@dataclass(frozen=True)
class WordBreakAdvance:
    position: int


@dataclass(frozen=True)
class MismatchedBreak:
    position: int
    char: str


@dataclass(frozen=True)
class BodyMatch:
    position: int
    display_char: str
    complete: bool
    composing: bool = False


@dataclass(frozen=True)
class BodyMismatch:
    position: int
    char: str
    composing: bool = False


@dataclass(frozen=True)
class TrailingOverflow:
    position: int
    char: str


Step = Union[
    LineBreakAdvance, WordBreakAdvance, MismatchedBreak,
    BodyMatch, BodyMismatch, TrailingOverflow,
]


@dataclass(frozen=True)
class AlignmentResult:
    target_cursor: int
    user_chars: Mapping[int, UserChar]
    mistakes: FrozenSet[int]
    auto_activated: FrozenSet[int]
    composing_cursor: Optional[int]
    last_char_committed: bool
    input_length: int
    target_length: int
    total_count: int
    chars_reached: int
    positions_reached: int
    correct_count: int

    def user_char_at(self, position: int) -> Optional[UserChar]:
        return self.user_chars.get(position)

    @property
    def is_complete(self) -> bool:
        """The session-completion condition the caller has to watch for."""
        return (
            self.input_length > 0
            and self.last_char_committed
            and self.target_cursor >= self.target_length
        )


class _Pass:
    """Mutable state threaded through one alignment pass."""

    def __init__(self, target: str, settings: EngineSettings):
        self.target = target
        self.settings = settings
        self.index = 0
        self.committed = False
        self.composing_cursor: Optional[int] = None
        self.user_chars: Dict[int, UserChar] = {}
        self.mistakes: Set[int] = set()
        self.activated: Set[int] = set()

    def skip_optional(self):
        t, n = self.target, len(self.target)
        while self.index < n and self.settings.is_optional(t[self.index]):
            self.activated.add(self.index)
            self.index += 1

    def skip_newlines(self):
        t, n = self.target, len(self.target)
        while self.index < n and t[self.index] == "\n":
            self.index += 1

    def activate_rest_of_word(self, start: int):
        t, n = self.target, len(self.target)
        k = start
        while k < n and t[k] not in BREAK_CHARS:
            if self.settings.is_optional(t[k]):
                self.activated.add(k)
            k += 1

    def record(self, position: int, ch: str, mistake: bool):
        self.user_chars[position] = UserChar(ch, mistake)
        if mistake:
            self.mistakes.add(position)

    def apply(self, step: Step):
        if isinstance(step, LineBreakAdvance):
            for k in range(self.index, step.newline_at):
                if self.settings.is_optional(self.target[k]):
                    self.activated.add(k)
            self.index = step.newline_at
            self.skip_newlines()
            self.skip_optional()
            self.committed = True
        elif isinstance(step, WordBreakAdvance):
            self.index = step.position + 1
            self.skip_newlines()
            self.skip_optional()
            self.committed = True
        elif isinstance(step, (MismatchedBreak, TrailingOverflow)):
            self.record(step.position, step.char, True)
            self.index = step.position + 1
            self.committed = True
        elif isinstance(step, BodyMismatch):
            self.record(step.position, step.char, True)
            if step.composing:
                self.composing_cursor = step.position
            self.index = step.position + 1
            self.committed = True
        else:
            self.record(step.position, step.display_char, False)
            if step.composing:
                self.composing_cursor = step.position
            self.activate_rest_of_word(step.position)
            self.index = step.position + 1
            self.committed = step.complete and not step.composing
            if step.complete:
                self.skip_optional()
                if self.target[step.position] == "\n":
                    self.skip_newlines()
                    self.skip_optional()

    def result(self, input_length: int) -> AlignmentResult:
        t, n = self.target, len(self.target)
        end = min(self.index, n)
        # progress starts with the first input; leading punctuation alone is not typing
        chars = end - t.count("\n", 0, end) + max(0, self.index - n) if input_length else 0
        newline_mistakes = sum(1 for k in self.mistakes if k < n and t[k] == "\n")
        correct = sum(
            1 for k, uc in self.user_chars.items()
            if not uc.is_mistake and k < n and t[k] != "\n"
        )
        return AlignmentResult(
            target_cursor=self.index,
            user_chars=MappingProxyType(dict(self.user_chars)),
            mistakes=frozenset(self.mistakes),
            auto_activated=frozenset(self.activated),
            composing_cursor=self.composing_cursor,
            last_char_committed=self.committed,
            input_length=input_length,
            target_length=n,
            total_count=countable_length(t),
            chars_reached=chars,
            positions_reached=chars + newline_mistakes,
            correct_count=correct,
        )


class Aligner:
    """
    Aligns a growing input against one target text.

    Holds nothing between calls except the jamo memo and the last result, so
    one instance can serve any number of ``align`` calls in any order.
    """

    def __init__(
        self,
        language: Union[Language, str] = Language.ENGLISH,
        settings: Optional[EngineSettings] = None,
        cache: Optional[JamoCache] = None,
    ):
        self.language = Language(language)
        self.settings = settings or DEFAULT_SETTINGS
        self.cache = cache if cache is not None else JamoCache()
        self._last_key: Optional[Tuple[str, str, bool]] = None
        self._last_result: Optional[AlignmentResult] = None

    @property
    def is_korean(self) -> bool:
        return self.language is Language.KOREAN

    def align(self, target: str, user_input: str, composing: bool = False) -> AlignmentResult:
        target = target or ""
        user_input = user_input or ""
        composing = bool(composing)

        key = (target, user_input, composing)
        if key == self._last_key and self._last_result is not None:
            return self._last_result

        p = _Pass(target, self.settings)
        p.skip_optional()

        last = len(user_input) - 1
        for i, ch in enumerate(user_input):
            p.skip_optional()
            p.apply(self.step(target, p.index, ch, composing and i == last))
        p.skip_optional()

        result = p.result(len(user_input))
        logger.debug(
            "aligned %d chars: cursor=%d mistakes=%d committed=%s",
            len(user_input), result.target_cursor, len(result.mistakes),
            result.last_char_committed,
        )
        self._last_key, self._last_result = key, result
        return result

    def step(self, target: str, index: int, ch: str, composing: bool = False) -> Step:
        """Classify one input character against the target at ``index``."""
        n = len(target)

        if not composing and ch in BREAK_CHARS:
            ahead = index
            while ahead < n and target[ahead] != "\n" and (
                target[ahead] == " " or self.settings.is_optional(target[ahead])
            ):
                ahead += 1
            if ahead < n and target[ahead] == "\n":
                return LineBreakAdvance(index, ahead)
            if index < n and target[index] in BREAK_CHARS:
                return WordBreakAdvance(index)
            return MismatchedBreak(index, ch)

        if index >= n:
            return TrailingOverflow(index, ch)

        t = target[index]
        if self.is_korean:
            nxt = target[index + 1] if index + 1 < n else None
            ok = is_jamo_prefix(ch, t, nxt, self.cache)
            mistake = not ok if composing else ch != t
            display = ch
        else:
            upper = t.isupper()
            ok = ch.lower() == t.lower() if upper else ch == t
            mistake = not ok
            display = t if upper and ok else ch

        if mistake:
            return BodyMismatch(index, ch, composing)
        if is_body_char(t):
            complete = len(self.cache.decompose(ch)) >= len(self.cache.decompose(t))
        else:
            complete = not composing
        return BodyMatch(index, display, complete, composing)


def align(
    target: str,
    user_input: str,
    composing: bool = False,
    language: Optional[Union[Language, str]] = None,
) -> AlignmentResult:
    """One-off alignment; the language is detected from the target if not given."""
    if language is None:
        language = classify(target or "")
    return Aligner(language).align(target, user_input, composing)
