"""
SM-2 scheduler.

Pure functions that compute the next scheduling state of a card from a
quality grade, and decide whether a card is due. The clock is always passed
in as `now`; nothing here reads the wall clock.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta

from hanzi_srs.domain.constants import (
    DEFAULT_EASE_FACTOR,
    FAILED_INTERVAL,
    FIRST_INTERVAL,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)
from hanzi_srs.domain.errors import InvalidQualityError
from hanzi_srs.domain.models import CardProgress


def seed_progress(item_id: str, now: datetime) -> CardProgress:
    """Default record for an item reviewed for the first time."""
    return CardProgress(
        item_id=item_id,
        ease_factor=DEFAULT_EASE_FACTOR,
        interval=0,
        repetitions=0,
        next_review_due=now,
        last_reviewed_at=None,
    )


def validate_quality(quality: object) -> int:
    """
    Return `quality` if it is an integer grade in 0..5.

    Out-of-range values are rejected rather than clamped.

    Raises:
        InvalidQualityError: For booleans, non-integers and out-of-range values.
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQualityError(quality)
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidQualityError(quality)
    return quality


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """
    SM-2 ease update, floored at 1.3.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    miss = MAX_QUALITY - quality
    return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _schedule(now: datetime, interval: int) -> tuple[datetime, int]:
    """
    Due time `interval` days after `now`, and the interval actually applied.

    Very long intervals saturate at the latest representable datetime; the
    interval is cut down to the whole days left before it.
    """
    try:
        return now + timedelta(days=interval), interval
    except OverflowError:
        latest = datetime.max.replace(tzinfo=now.tzinfo)
        return latest, (latest - now).days


def transition(progress: CardProgress, quality: int, now: datetime) -> CardProgress:
    """
    Apply one review of the given quality and return the updated record.

    A failed review (quality < 3) resets repetitions and schedules the card
    for tomorrow without touching the ease factor. A successful one grows the
    interval 1 -> 6 -> round(interval * ease) and adjusts the ease factor.

    Args:
        progress: Existing or freshly seeded record. Not modified.
        quality: Recall grade, 0 (blackout) to 5 (perfect).
        now: Time of the review.

    Raises:
        InvalidQualityError: If quality is not an integer in 0..5.
    """
    quality = validate_quality(quality)

    if quality < PASSING_QUALITY:
        repetitions = 0
        interval = FAILED_INTERVAL
        ease_factor = progress.ease_factor
    else:
        repetitions = progress.repetitions + 1
        if repetitions == 1:
            interval = FIRST_INTERVAL
        elif repetitions == 2:
            interval = SECOND_INTERVAL
        else:
            interval = _round_half_up(progress.interval * progress.ease_factor)
        ease_factor = next_ease_factor(progress.ease_factor, quality)

    next_review_due, interval = _schedule(now, interval)

    return replace(
        progress,
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_due=next_review_due,
        last_reviewed_at=now,
    )


def is_due(progress: CardProgress, now: datetime) -> bool:
    return now >= progress.next_review_due


def overdue_by(progress: CardProgress, now: datetime) -> timedelta:
    """How long past its due time a card is (negative if not yet due)."""
    return now - progress.next_review_due
