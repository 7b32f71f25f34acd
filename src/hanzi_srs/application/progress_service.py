"""
Progress updates: apply a review to the progress set and persist it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from hanzi_srs.application.scheduler import seed_progress, transition
from hanzi_srs.domain.errors import ProgressStoreError
from hanzi_srs.domain.models import CardProgress
from hanzi_srs.domain.ports import ProgressStore

logger = logging.getLogger(__name__)


def upsert(
    progress: list[CardProgress], item_id: str, quality: int, now: datetime
) -> list[CardProgress]:
    """
    Return a new progress set with one review of `item_id` applied.

    An existing record is replaced in place; an unseen item gets a seeded
    record, transitioned by this first review and appended.
    """
    updated = list(progress)
    for index, card in enumerate(updated):
        if card.item_id == item_id:
            updated[index] = transition(card, quality, now)
            return updated

    updated.append(transition(seed_progress(item_id, now), quality, now))
    return updated


@dataclass
class ReviewOutcome:
    """Result of recording one review."""

    progress: list[CardProgress]  # Authoritative in-memory set
    card: CardProgress  # The record after this review
    saved: bool
    warning: str | None = None


class ReviewService:
    """
    Records learner responses: upsert, then persist.

    A failed save never loses the review; it is reported in the outcome so the
    caller can tell the learner, and the next review saves the full set again.
    """

    def __init__(self, store: ProgressStore):
        self._store = store

    def record_review(
        self,
        progress: list[CardProgress],
        item_id: str,
        quality: int,
        now: datetime,
    ) -> ReviewOutcome:
        """
        Apply a review and save the resulting set.

        Raises:
            InvalidQualityError: If quality is not an integer in 0..5.
        """
        updated = upsert(progress, item_id, quality, now)
        card = next(c for c in updated if c.item_id == item_id)

        try:
            self._store.save(updated)
        except ProgressStoreError as e:
            logger.warning(f"Progress for {item_id} was not saved: {e}")
            return ReviewOutcome(
                progress=updated,
                card=card,
                saved=False,
                warning=f"Progress was not saved: {e}",
            )

        logger.debug(
            f"Recorded {item_id} q={quality} -> interval={card.interval} "
            f"reps={card.repetitions} ease={card.ease_factor:.2f}"
        )
        return ReviewOutcome(progress=updated, card=card, saved=True)
