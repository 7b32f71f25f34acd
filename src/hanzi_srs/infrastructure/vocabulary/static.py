"""Vocabulary source backed by an in-memory list of items."""

from collections.abc import Iterable

from hanzi_srs.domain.errors import VocabularyError
from hanzi_srs.domain.models import VocabItem
from hanzi_srs.domain.ports import VocabularySource


class StaticVocabulary(VocabularySource):
    """
    Serves a fixed list of items, optionally restricted to some levels.

    Item order is preserved; it is the order new items are introduced in.
    """

    def __init__(self, items: Iterable[VocabItem], levels: Iterable[int] | None = None):
        wanted = set(levels) if levels is not None else None
        self._items: dict[str, VocabItem] = {}
        for item in items:
            if item.item_id in self._items:
                raise VocabularyError(f"Duplicate vocabulary id: {item.item_id}")
            if wanted is not None and item.level not in wanted:
                continue
            self._items[item.item_id] = item

    def item_ids(self) -> list[str]:
        return list(self._items)

    def get(self, item_id: str) -> VocabItem | None:
        return self._items.get(item_id)

    def __len__(self) -> int:
        return len(self._items)
