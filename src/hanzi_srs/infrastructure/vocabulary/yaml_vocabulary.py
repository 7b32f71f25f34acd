"""
YAML Vocabulary: loads the word list from a YAML file.

Expected layout:

    words:
      - id: h1-001
        hanzi: 你好
        pinyin: nǐ hǎo
        english: hello
        level: 1
        category: greetings
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hanzi_srs.domain.errors import VocabularyError
from hanzi_srs.domain.models import VocabItem

from .static import StaticVocabulary

logger = logging.getLogger(__name__)

DEFAULT_VOCABULARY_PATH = Path(__file__).resolve().parents[2] / "data" / "vocabulary.yaml"


class VocabEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    hanzi: str
    pinyin: str
    english: str
    level: int = Field(ge=1)
    category: str | None = None

    def to_item(self) -> VocabItem:
        return VocabItem(
            item_id=self.id,
            hanzi=self.hanzi,
            pinyin=self.pinyin,
            english=self.english,
            level=self.level,
            category=self.category,
        )


class YamlVocabulary(StaticVocabulary):
    def __init__(self, path: Path = DEFAULT_VOCABULARY_PATH, levels: Iterable[int] | None = None):
        self.path = Path(path)
        super().__init__(_load_items(self.path), levels=levels)
        logger.debug(f"Loaded {len(self)} vocabulary items from {self.path}")


def _load_items(path: Path) -> list[VocabItem]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise VocabularyError(f"Could not read vocabulary file {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise VocabularyError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("words"), list):
        raise VocabularyError(f"{path} must contain a top-level 'words' list")

    items: list[VocabItem] = []
    for index, raw in enumerate(data["words"]):
        try:
            items.append(VocabEntry.model_validate(raw).to_item())
        except ValidationError as e:
            raise VocabularyError(f"Invalid entry #{index + 1} in {path}: {e}") from e
    return items
