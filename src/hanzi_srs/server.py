import logging
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, StrictInt, ValidationError

from hanzi_srs.application.config import AppConfig, resolve_config
from hanzi_srs.application.factory import (
    get_progress_store,
    get_session_builder,
    get_vocabulary,
)
from hanzi_srs.application.grading import REVIEW_QUALITIES, SIMPLE_REVIEW_OPTIONS
from hanzi_srs.application.progress_service import ReviewService
from hanzi_srs.application.stats import StatsService
from hanzi_srs.consts import VERSION
from hanzi_srs.domain.errors import InvalidQualityError, VocabularyError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("hanzi_srs.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"hanzi-srs server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("hanzi-srs server shutting down...")


app = FastAPI(
    title="hanzi-srs",
    description="Spaced-repetition scheduling API for a vocabulary practice front-end.",
    version=VERSION,
    lifespan=lifespan,
)

start_time = time.time()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _config(overrides: dict | None = None) -> AppConfig:
    try:
        return resolve_config(overrides)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class VocabItemResponse(BaseModel):
    item_id: str
    hanzi: str
    pinyin: str
    english: str
    level: int
    category: str | None = None


class SessionResponse(BaseModel):
    items: list[VocabItemResponse]
    empty: bool


class ReviewRequest(BaseModel):
    item_id: str
    quality: StrictInt


class CardResponse(BaseModel):
    item_id: str
    ease_factor: float
    interval: int
    repetitions: int
    next_review_due: datetime
    last_reviewed_at: datetime | None = None


class ReviewResponse(BaseModel):
    card: CardResponse
    saved: bool
    warning: str | None = None


class StatsResponse(BaseModel):
    total_seen: int
    learned_count: int
    due_count: int
    average_ease: float


@app.get("/health", response_model=HealthResponse)
def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
def get_version():
    return {"version": VERSION}


@app.get("/session", response_model=SessionResponse)
def get_session(
    level: list[int] | None = Query(default=None),
    due_limit: int | None = None,
    new_limit: int | None = None,
    seed: int | None = None,
):
    """
    Build the next practice session. An empty session means nothing is due.
    """
    config = _config(
        {"levels": level, "due_limit": due_limit, "new_limit": new_limit, "seed": seed}
    )
    try:
        items = get_session_builder(config).build(_now())
    except VocabularyError as e:
        logger.error(f"Session build failed: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return SessionResponse(
        items=[VocabItemResponse(**asdict(item)) for item in items],
        empty=not items,
    )


@app.post("/review", response_model=ReviewResponse)
def post_review(req: ReviewRequest):
    """
    Record one review of a known vocabulary id (404 otherwise). A failed save
    is reported, not raised: the review still counts for the rest of the
    session.
    """
    config = _config()
    try:
        known = get_vocabulary(config, all_levels=True).get(req.item_id)
    except VocabularyError as e:
        logger.error(f"Vocabulary load failed: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    if known is None:
        raise HTTPException(status_code=404, detail=f"Unknown vocabulary id: {req.item_id}")

    store = get_progress_store(config)
    try:
        outcome = ReviewService(store).record_review(
            store.load(), req.item_id, req.quality, _now()
        )
    except InvalidQualityError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return ReviewResponse(
        card=CardResponse(**asdict(outcome.card)),
        saved=outcome.saved,
        warning=outcome.warning,
    )


@app.get("/stats", response_model=StatsResponse)
def get_stats():
    summary = StatsService(get_progress_store(_config())).summary(_now())
    return StatsResponse(**asdict(summary))


@app.get("/qualities")
def get_qualities():
    """Labelled grades for the grading buttons."""
    return {
        "qualities": [asdict(q) for q in REVIEW_QUALITIES],
        "simple": [asdict(q) for q in SIMPLE_REVIEW_OPTIONS],
    }
