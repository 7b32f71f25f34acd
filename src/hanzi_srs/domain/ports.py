"""
Ports (interfaces) for persistence and reference data.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import CardProgress, VocabItem


class ProgressStore(ABC):
    """
    Port for the single local key-value store holding all progress records.

    Implementations:
        - JsonProgressStore: One JSON document on disk.
        - InMemoryProgressStore: Process-local, for tests and throwaway sessions.
    """

    @abstractmethod
    def load(self) -> list[CardProgress]:
        """
        Return the full persisted progress set.

        Returns an empty list when nothing was persisted or the payload is
        malformed. Never raises.
        """

    @abstractmethod
    def save(self, progress: list[CardProgress]) -> None:
        """
        Replace the persisted representation with `progress`.

        Raises:
            ProgressStoreError: If the write did not complete. The previous
                persisted state is left intact.
        """


class VocabularySource(ABC):
    """Port for the read-only vocabulary the learner practices."""

    @abstractmethod
    def item_ids(self) -> list[str]:
        """Stable, ordered list of item identifiers."""

    @abstractmethod
    def get(self, item_id: str) -> VocabItem | None:
        """Look up an item, or None if the id does not resolve."""
