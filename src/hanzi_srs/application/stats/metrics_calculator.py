"""
Metrics calculator for progress statistics.

This is a pure computation module with no I/O.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from hanzi_srs.application.scheduler import is_due
from hanzi_srs.domain.constants import (
    DEFAULT_EASE_FACTOR,
    EASE_DISPLAY_PRECISION,
    LEARNED_REPETITIONS,
    PASSING_QUALITY,
)
from hanzi_srs.domain.models import CardProgress
from hanzi_srs.domain.stats.models import ProgressSummary


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def summarize(progress: list[CardProgress], now: datetime) -> ProgressSummary:
    """
    Summary counts and average ease over the whole progress set.

    An empty set yields zero counts and the default ease of 2.5. The average
    ease is rounded to two decimals, halves upward.
    """
    total = len(progress)
    learned = sum(1 for card in progress if card.repetitions >= LEARNED_REPETITIONS)
    due = sum(1 for card in progress if is_due(card, now))

    if total:
        average_ease = sum(card.ease_factor for card in progress) / total
    else:
        average_ease = DEFAULT_EASE_FACTOR

    return ProgressSummary(
        total_seen=total,
        learned_count=learned,
        due_count=due,
        average_ease=_round_half_up(average_ease, EASE_DISPLAY_PRECISION),
    )


@dataclass
class SessionTally:
    """
    Running score for one practice session.

    Grades of 3 and above count as correct, anything lower goes to review.
    """

    correct: int = 0
    incorrect: int = 0

    def record(self, quality: int) -> None:
        if quality >= PASSING_QUALITY:
            self.correct += 1
        else:
            self.incorrect += 1

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> int:
        """Percentage of correct answers, 0 when nothing was answered."""
        if self.total == 0:
            return 0
        return int(_round_half_up(self.correct * 100 / self.total))
