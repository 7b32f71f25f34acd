"""Tests for the YAML vocabulary source."""

import pytest

from hanzi_srs.domain.errors import VocabularyError
from hanzi_srs.infrastructure.vocabulary import DEFAULT_VOCABULARY_PATH, YamlVocabulary

WORDS = """
words:
  - {id: w1, hanzi: 你好, pinyin: nǐ hǎo, english: hello, level: 1}
  - {id: w2, hanzi: 咖啡, pinyin: kāfēi, english: coffee, level: 2, category: food}
  - {id: w3, hanzi: 地图, pinyin: dìtú, english: map, level: 3}
"""


@pytest.fixture
def words_file(tmp_path):
    path = tmp_path / "words.yaml"
    path.write_text(WORDS, encoding="utf-8")
    return path


def test_loads_in_file_order(words_file):
    vocabulary = YamlVocabulary(words_file)

    assert vocabulary.item_ids() == ["w1", "w2", "w3"]
    item = vocabulary.get("w2")
    assert item.hanzi == "咖啡"
    assert item.category == "food"
    assert vocabulary.get("w1").category is None
    assert vocabulary.get("missing") is None


def test_level_filter(words_file):
    vocabulary = YamlVocabulary(words_file, levels=[1, 3])

    assert vocabulary.item_ids() == ["w1", "w3"]
    assert vocabulary.get("w2") is None


def test_packaged_sample():
    vocabulary = YamlVocabulary(DEFAULT_VOCABULARY_PATH)

    assert len(vocabulary) == 28
    assert vocabulary.item_ids()[0] == "h1-001"
    assert {vocabulary.get(i).level for i in vocabulary.item_ids()} == {1, 2, 3}


@pytest.mark.parametrize(
    "content",
    [
        "words: [unclosed",
        "- just a list",
        "words: {a: 1}",
        "words:\n  - {id: w1, hanzi: 你, pinyin: nǐ, english: you, level: 0}",
        "words:\n  - {id: w1, hanzi: 你, pinyin: nǐ, english: you, level: 1}\n"
        "  - {id: w1, hanzi: 他, pinyin: tā, english: he, level: 1}",
    ],
)
def test_invalid_files_raise(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(VocabularyError):
        YamlVocabulary(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(VocabularyError):
        YamlVocabulary(tmp_path / "nope.yaml")
