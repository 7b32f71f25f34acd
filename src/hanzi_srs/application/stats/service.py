"""
Stats Service: application layer orchestrator.

Loads the progress set from the store and summarizes it.
"""

import logging
from datetime import datetime

from hanzi_srs.domain.ports import ProgressStore
from hanzi_srs.domain.stats.models import ProgressSummary

from .metrics_calculator import summarize

logger = logging.getLogger(__name__)


class StatsService:
    """
    Application service for dashboard statistics.

    Depends on the ProgressStore abstraction, not a concrete adapter.
    """

    def __init__(self, store: ProgressStore):
        self._store = store

    def summary(self, now: datetime) -> ProgressSummary:
        progress = self._store.load()
        result = summarize(progress, now)
        logger.debug(f"Summary over {result.total_seen} cards: {result}")
        return result
