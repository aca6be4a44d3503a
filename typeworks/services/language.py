# services/language.py
from enum import Enum
import re

_KOREAN = re.compile(r"[ㄱ-ㅎㅏ-ㅣ가-힣]")


class Language(str, Enum):
    KOREAN = "KOREAN"
    ENGLISH = "ENGLISH"


def classify(sample: str, sample_size: int = 500) -> Language:
    """Pick the matching rules for a text from its opening characters."""
    if _KOREAN.search((sample or "")[:sample_size]):
        return Language.KOREAN
    return Language.ENGLISH
