# utils/text.py
import re

_BLANK_RUN = re.compile(r"\n{3,}")


def normalize_text(raw: str) -> str:
    """Unify line endings, trim every line and keep at most one blank line in a row."""
    text = (raw or "").replace("\r\n", "\n").replace("\r", "\n")
    text = "\n".join(line.strip() for line in text.split("\n"))
    return _BLANK_RUN.sub("\n\n", text).strip()


def countable_length(text: str) -> int:
    """Characters that count towards progress (everything but newlines)."""
    return len(text) - text.count("\n")
