import os
from datetime import datetime, timedelta, timezone

import pytest

from hanzi_srs.domain.models import CardProgress, VocabItem

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir and clears HANZI_SRS_* settings."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and progress files
    monkeypatch.setenv("HOME", str(home))
    for key in [k for k in os.environ if k.startswith("HANZI_SRS_")]:
        monkeypatch.delenv(key)
    return home


@pytest.fixture
def now():
    return NOW


def make_card(
    item_id: str,
    due_in_days: float = 0,
    ease_factor: float = 2.5,
    interval: int = 1,
    repetitions: int = 1,
    reviewed: bool = True,
) -> CardProgress:
    """Card whose next review is `due_in_days` from NOW (negative = overdue)."""
    due = NOW + timedelta(days=due_in_days)
    return CardProgress(
        item_id=item_id,
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        next_review_due=due,
        last_reviewed_at=due - timedelta(days=interval) if reviewed else None,
    )


def make_item(item_id: str, level: int = 1, english: str = "word") -> VocabItem:
    return VocabItem(
        item_id=item_id,
        hanzi=f"字{item_id}",
        pinyin=f"zi {item_id}",
        english=english,
        level=level,
    )
