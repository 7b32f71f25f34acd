"""
Session builder for practice sittings.

Builds one bounded batch of items by:
1. Taking due cards, most overdue first, up to the due limit
2. Adding never-seen vocabulary in its original order, up to the new limit
3. Shuffling the combined batch
4. Resolving ids back to vocabulary items, dropping ids that no longer exist
"""

import logging
import random
from collections.abc import Iterable
from datetime import datetime

from hanzi_srs.application.scheduler import is_due, overdue_by
from hanzi_srs.domain.constants import DEFAULT_DUE_LIMIT, DEFAULT_NEW_LIMIT
from hanzi_srs.domain.models import CardProgress, VocabItem
from hanzi_srs.domain.ports import ProgressStore, VocabularySource

logger = logging.getLogger(__name__)


def select_due(
    progress: list[CardProgress], due_limit: int, now: datetime
) -> list[CardProgress]:
    """
    Due cards ordered by how overdue they are, largest first.

    Cards due at the same instant keep their progress-set order.
    """
    due_cards = [card for card in progress if is_due(card, now)]
    # sorted() stays stable with reverse=True, so ties keep input order.
    due_cards = sorted(due_cards, key=lambda card: overdue_by(card, now), reverse=True)
    return due_cards[: max(0, due_limit)]


def select_new(
    all_item_ids: Iterable[str], progress: list[CardProgress], new_limit: int
) -> list[str]:
    """Ids with no progress record, in their original order."""
    limit = max(0, new_limit)
    if limit == 0:
        return []

    seen = {card.item_id for card in progress}
    new_ids: list[str] = []
    for item_id in all_item_ids:
        if item_id in seen:
            continue
        seen.add(item_id)
        new_ids.append(item_id)
        if len(new_ids) == limit:
            break
    return new_ids


def build_session(
    all_item_ids: Iterable[str],
    progress: list[CardProgress],
    due_limit: int,
    new_limit: int,
    now: datetime,
    rng: random.Random | None = None,
) -> list[str]:
    """
    Ordered item ids for one practice session.

    Args:
        all_item_ids: Ordered ids of the vocabulary being practiced.
        progress: Full progress set.
        due_limit: Maximum number of due cards.
        new_limit: Maximum number of never-seen items.
        now: Reference time for due checks.
        rng: Source of the shuffle; an unseeded generator if omitted.

    Returns:
        At most due_limit + new_limit distinct ids. Empty when nothing is due
        and nothing is new.
    """
    due_ids = [card.item_id for card in select_due(progress, due_limit, now)]
    new_ids = select_new(all_item_ids, progress, new_limit)

    session = due_ids + new_ids
    (rng or random.Random()).shuffle(session)

    logger.debug(f"Session: {len(due_ids)} due, {len(new_ids)} new")
    return session


def resolve_session(item_ids: list[str], vocabulary: VocabularySource) -> list[VocabItem]:
    """Map ids to vocabulary items, dropping ids that do not resolve."""
    items: list[VocabItem] = []
    for item_id in item_ids:
        item = vocabulary.get(item_id)
        if item is None:
            logger.debug(f"Dropping {item_id}: not in the current vocabulary")
            continue
        items.append(item)
    return items


class SessionBuilder:
    """
    Builds practice sessions from the progress store and vocabulary source.
    """

    def __init__(
        self,
        store: ProgressStore,
        vocabulary: VocabularySource,
        due_limit: int = DEFAULT_DUE_LIMIT,
        new_limit: int = DEFAULT_NEW_LIMIT,
        rng: random.Random | None = None,
    ):
        self._store = store
        self._vocabulary = vocabulary
        self.due_limit = due_limit
        self.new_limit = new_limit
        self._rng = rng or random.Random()

    def build(self, now: datetime) -> list[VocabItem]:
        """
        Load progress and return the items for the next session.

        An empty list means nothing is due and nothing is new.
        """
        progress = self._store.load()
        ids = build_session(
            self._vocabulary.item_ids(),
            progress,
            self.due_limit,
            self.new_limit,
            now,
            rng=self._rng,
        )
        items = resolve_session(ids, self._vocabulary)
        if not items:
            logger.info("Nothing to review")
        return items
