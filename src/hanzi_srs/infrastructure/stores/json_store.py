"""
JSON Progress Store: infrastructure adapter for a single JSON document on disk.

Layout: one JSON object keyed by item id, each value holding the full record
with ISO-8601 timestamps.
"""

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from hanzi_srs.domain.constants import MIN_EASE_FACTOR
from hanzi_srs.domain.errors import ProgressStoreError
from hanzi_srs.domain.models import CardProgress
from hanzi_srs.domain.ports import ProgressStore

logger = logging.getLogger(__name__)


class ProgressRecord(BaseModel):
    """On-disk shape of one CardProgress."""

    model_config = ConfigDict(extra="ignore")

    item_id: str
    ease_factor: float = Field(ge=MIN_EASE_FACTOR)
    interval: int = Field(ge=0)
    repetitions: int = Field(ge=0)
    next_review_due: datetime
    last_reviewed_at: datetime | None = None

    @field_validator("next_review_due", "last_reviewed_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        # Naive timestamps are read as UTC so they compare with an aware clock.
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_card(cls, card: CardProgress) -> "ProgressRecord":
        return cls(
            item_id=card.item_id,
            ease_factor=card.ease_factor,
            interval=card.interval,
            repetitions=card.repetitions,
            next_review_due=card.next_review_due,
            last_reviewed_at=card.last_reviewed_at,
        )

    def to_card(self) -> CardProgress:
        return CardProgress(
            item_id=self.item_id,
            ease_factor=self.ease_factor,
            interval=self.interval,
            repetitions=self.repetitions,
            next_review_due=self.next_review_due,
            last_reviewed_at=self.last_reviewed_at,
        )


_PAYLOAD = TypeAdapter(dict[str, ProgressRecord])


class JsonProgressStore(ProgressStore):
    """
    Persists the progress set as one JSON file.

    Loading is fail-open: anything unreadable is treated as an empty store.
    Saving writes a temporary file next to the target and renames it over the
    target, so readers never observe a partial write.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> list[CardProgress]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Could not read progress file {self.path}: {e}")
            return []

        if not raw.strip():
            return []

        try:
            records = _PAYLOAD.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Ignoring malformed progress file {self.path} "
                f"({e.error_count()} errors); starting from empty progress"
            )
            return []

        for key, record in records.items():
            if key != record.item_id:
                logger.warning(
                    f"Ignoring malformed progress file {self.path}: "
                    f"key {key!r} holds record for {record.item_id!r}"
                )
                return []

        return [record.to_card() for record in records.values()]

    def save(self, progress: list[CardProgress]) -> None:
        records = {card.item_id: ProgressRecord.from_card(card) for card in progress}
        payload = _PAYLOAD.dump_json(records, indent=2)

        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as fp:
                fp.write(payload)
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ProgressStoreError(f"Could not write {self.path}: {e}") from e

        logger.debug(f"Saved {len(records)} progress records to {self.path}")
