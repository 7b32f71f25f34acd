"""
Adapter Factory
Centralizes building the progress store and vocabulary source from config.
"""

import random

from hanzi_srs.application.config import AppConfig
from hanzi_srs.application.session_builder import SessionBuilder
from hanzi_srs.domain.ports import ProgressStore, VocabularySource
from hanzi_srs.infrastructure.stores import JsonProgressStore
from hanzi_srs.infrastructure.vocabulary import DEFAULT_VOCABULARY_PATH, YamlVocabulary


def get_progress_store(config: AppConfig) -> ProgressStore:
    return JsonProgressStore(config.progress_path)


def get_vocabulary(config: AppConfig, all_levels: bool = False) -> VocabularySource:
    """
    Returns the vocabulary for the configured levels, or every level when
    `all_levels` is set.

    Raises:
        VocabularyError: If the vocabulary file cannot be loaded.
    """
    levels = None if all_levels else config.levels
    return YamlVocabulary(config.vocabulary_path or DEFAULT_VOCABULARY_PATH, levels=levels)


def get_session_builder(
    config: AppConfig,
    store: ProgressStore | None = None,
    vocabulary: VocabularySource | None = None,
) -> SessionBuilder:
    return SessionBuilder(
        store or get_progress_store(config),
        vocabulary or get_vocabulary(config),
        due_limit=config.due_limit,
        new_limit=config.new_limit,
        rng=random.Random(config.seed),
    )
