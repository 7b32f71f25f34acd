"""
Domain models for spaced-repetition progress and vocabulary.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

PracticeDirection = Literal["chinese-to-english", "english-to-chinese"]


@dataclass(frozen=True)
class CardProgress:
    """
    Scheduling state for one vocabulary item that has been reviewed at least once.

    Attributes:
        item_id: Stable identifier of the vocabulary item.
        ease_factor: Interval multiplier, never below 1.3.
        interval: Days until the next review (0 for a never-reviewed item).
        repetitions: Consecutive successful reviews; reset to 0 on failure.
        next_review_due: The item is due once the clock reaches this instant.
        last_reviewed_at: When the item was last reviewed, None if never.
    """

    item_id: str
    ease_factor: float
    interval: int
    repetitions: int
    next_review_due: datetime
    last_reviewed_at: datetime | None = None


@dataclass(frozen=True)
class VocabItem:
    """A read-only vocabulary entry."""

    item_id: str
    hanzi: str
    pinyin: str
    english: str
    level: int
    category: str | None = None


@dataclass(frozen=True)
class ReviewQuality:
    """A labelled quality grade offered to the learner."""

    score: int
    label: str
    description: str = ""
