# app/state.py
from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict

from typeworks.app.errors import TypeworksError
from typeworks.services.language import Language


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything needed to resume a session: the three alignment inputs plus timing."""

    text: str
    language: Language
    user_input: str = ""
    keystrokes: int = 0
    elapsed: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["language"] = self.language.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SessionSnapshot":
        required = {"text", "language"}
        missing = required - set(d.keys())
        if missing:
            raise TypeworksError(f"Missing snapshot keys: {', '.join(sorted(missing))}")
        try:
            return cls(
                text=str(d["text"]),
                language=Language(d["language"]),
                user_input=str(d.get("user_input", "")),
                keystrokes=max(0, int(d.get("keystrokes", 0))),
                elapsed=max(0.0, float(d.get("elapsed", 0.0))),
            )
        except (TypeError, ValueError) as e:
            raise TypeworksError(f"Invalid snapshot: {e}") from e
