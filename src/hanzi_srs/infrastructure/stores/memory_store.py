"""In-memory progress store for tests and throwaway sessions."""

from hanzi_srs.domain.errors import ProgressStoreError
from hanzi_srs.domain.models import CardProgress
from hanzi_srs.domain.ports import ProgressStore


class InMemoryProgressStore(ProgressStore):
    def __init__(self, initial: list[CardProgress] | None = None, fail_on_save: bool = False):
        self._progress = list(initial or [])
        self.fail_on_save = fail_on_save
        self.save_count = 0

    def load(self) -> list[CardProgress]:
        return list(self._progress)

    def save(self, progress: list[CardProgress]) -> None:
        if self.fail_on_save:
            raise ProgressStoreError("in-memory store is set to fail")
        self._progress = list(progress)
        self.save_count += 1
