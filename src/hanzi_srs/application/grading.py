"""
Grading policy for the presentation layer.

Labels for the quality grades, the mapping from a right/wrong typed answer to
a quality, and the answer checker used by typing practice. The scheduler
itself only ever sees integer qualities.
"""

import re

from hanzi_srs.domain.constants import CORRECT_QUALITY, INCORRECT_QUALITY
from hanzi_srs.domain.models import PracticeDirection, ReviewQuality, VocabItem

REVIEW_QUALITIES: list[ReviewQuality] = [
    ReviewQuality(0, "Forgot", "Complete blackout"),
    ReviewQuality(1, "Wrong", "Incorrect but remembered after seeing"),
    ReviewQuality(2, "Hard", "Correct with serious difficulty"),
    ReviewQuality(3, "Good", "Correct with some hesitation"),
    ReviewQuality(4, "Easy", "Correct with little effort"),
    ReviewQuality(5, "Perfect", "Instant recall"),
]

SIMPLE_REVIEW_OPTIONS: list[ReviewQuality] = [
    ReviewQuality(1, "Again"),
    ReviewQuality(3, "Hard"),
    ReviewQuality(4, "Good"),
    ReviewQuality(5, "Easy"),
]

_TONE_MAP = str.maketrans(
    {
        "ā": "a", "á": "a", "ǎ": "a", "à": "a",
        "ē": "e", "é": "e", "ě": "e", "è": "e",
        "ī": "i", "í": "i", "ǐ": "i", "ì": "i",
        "ō": "o", "ó": "o", "ǒ": "o", "ò": "o",
        "ū": "u", "ú": "u", "ǔ": "u", "ù": "u",
        "ǖ": "v", "ǘ": "v", "ǚ": "v", "ǜ": "v", "ü": "v",
    }
)  # fmt: skip

_WHITESPACE_RE = re.compile(r"\s+")
_MEANING_SEPARATOR_RE = re.compile(r"[,;]")


def quality_for_result(correct: bool) -> int:
    """Quality recorded for a typed answer: 4 if right, 2 if wrong."""
    return CORRECT_QUALITY if correct else INCORRECT_QUALITY


def normalize_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.strip().lower())


def remove_tone_marks(pinyin: str) -> str:
    """'nǐ hǎo' -> 'ni hao'; ü becomes v."""
    return pinyin.translate(_TONE_MAP)


def check_answer(answer: str, item: VocabItem, direction: PracticeDirection) -> bool:
    """
    Check a typed answer against a vocabulary item.

    chinese-to-english accepts any listed meaning, matched exactly or as a
    substring either way ("hello" matches "hello, hi"). english-to-chinese
    accepts the hanzi, the pinyin, or the pinyin without tone marks.
    A blank answer is never correct.
    """
    normalized = normalize_text(answer)
    if not normalized:
        return False

    if direction == "chinese-to-english":
        options = [
            option.strip()
            for option in _MEANING_SEPARATOR_RE.split(item.english.lower())
            if option.strip()
        ]
        return any(
            normalized == option or normalized in option or option in normalized
            for option in options
        )

    pinyin = normalize_text(item.pinyin)
    return (
        normalized == normalize_text(item.hanzi)
        or normalized == pinyin
        or remove_tone_marks(normalized) == remove_tone_marks(pinyin)
    )


def assign_directions(items: list[VocabItem]) -> list[tuple[VocabItem, PracticeDirection]]:
    """Alternate typing directions, starting with chinese-to-english."""
    return [
        (item, "chinese-to-english" if index % 2 == 0 else "english-to-chinese")
        for index, item in enumerate(items)
    ]
