"""hanzi-srs CLI: session preview, interactive practice, reviews, stats and config."""

import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, Literal

import typer
from pydantic import ValidationError

from hanzi_srs.application.config import AppConfig, resolve_config
from hanzi_srs.application.factory import (
    get_progress_store,
    get_session_builder,
    get_vocabulary,
)
from hanzi_srs.application.grading import (
    REVIEW_QUALITIES,
    assign_directions,
    check_answer,
    quality_for_result,
)
from hanzi_srs.application.progress_service import ReviewService
from hanzi_srs.application.scheduler import validate_quality
from hanzi_srs.application.stats import SessionTally, StatsService
from hanzi_srs.domain.errors import InvalidQualityError, VocabularyError
from hanzi_srs.domain.models import PracticeDirection, VocabItem

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="hanzi-srs: Spaced-repetition practice for Chinese vocabulary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage hanzi-srs configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def _log_level(verbose: int) -> int:
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _resolve_with_overrides(ctx: typer.Context, **overrides: Any) -> AppConfig:
    """Resolve config with CLI overrides and apply its log verbosity."""
    overrides.setdefault("verbose", (ctx.obj or {}).get("verbose"))
    try:
        config = resolve_config(overrides)
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(2) from e
    logging.getLogger().setLevel(_log_level(config.verbose))
    return config


def _item_dict(item: VocabItem) -> dict[str, Any]:
    return asdict(item)


def _caught_up() -> None:
    typer.secho("All caught up! Nothing is due and there are no new words.", fg="green")


LevelOption = Annotated[
    list[int] | None,
    typer.Option("--level", "-l", help="HSK level to practice. Repeat for several."),
]
DueLimitOption = Annotated[int | None, typer.Option(help="Maximum due cards per session.")]
NewLimitOption = Annotated[int | None, typer.Option(help="Maximum new words per session.")]
SeedOption = Annotated[int | None, typer.Option(help="Seed the shuffle for a repeatable order.")]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log warnings.")] = False,
):
    """Global settings for hanzi-srs."""
    ctx.ensure_object(dict)
    # Flags win over the configured verbosity; None leaves it to the config.
    if quiet:
        ctx.obj["verbose"] = 0
    elif verbose:
        ctx.obj["verbose"] = 1 + verbose


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def session(
    ctx: typer.Context,
    level: LevelOption = None,
    due_limit: DueLimitOption = None,
    new_limit: NewLimitOption = None,
    seed: SeedOption = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Preview the words the next practice session would contain."""
    config = _resolve_with_overrides(
        ctx, levels=level or None, due_limit=due_limit, new_limit=new_limit, seed=seed
    )
    try:
        items = get_session_builder(config).build(_now())
    except VocabularyError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    if json_output:
        typer.echo(json.dumps([_item_dict(i) for i in items], ensure_ascii=False, indent=2))
        return

    if not items:
        _caught_up()
        return

    typer.echo(f"Next session: {len(items)} words")
    for index, item in enumerate(items, start=1):
        typer.echo(f"  {index:>2}. {item.hanzi}  {item.pinyin}  {item.english}  (HSK {item.level})")


@app.command()
def practice(
    ctx: typer.Context,
    mode: Annotated[
        Literal["flashcard", "typing"],
        typer.Option(
            "--mode",
            "-m",
            help=(
                "'flashcard' = reveal the card and grade yourself 0-5. "
                "'typing' = type the answer, alternating directions."
            ),
        ),
    ] = "flashcard",
    level: LevelOption = None,
    due_limit: DueLimitOption = None,
    new_limit: NewLimitOption = None,
    seed: SeedOption = None,
):
    """[bold green]Practice[/bold green] due and new words interactively."""
    config = _resolve_with_overrides(
        ctx, levels=level or None, due_limit=due_limit, new_limit=new_limit, seed=seed
    )
    store = get_progress_store(config)
    try:
        vocabulary = get_vocabulary(config)
    except VocabularyError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e

    items = get_session_builder(config, store, vocabulary).build(_now())
    if not items:
        _caught_up()
        return

    if mode == "typing":
        cards = assign_directions(items)
    else:
        cards = [(item, "chinese-to-english") for item in items]

    service = ReviewService(store)
    progress = store.load()
    tally = SessionTally()

    for index, (item, direction) in enumerate(cards, start=1):
        header = f"\n[{index}/{len(cards)}] HSK {item.level}"
        if item.category:
            header += f" · {item.category}"
        typer.secho(header, fg="cyan")

        if mode == "typing":
            quality = _ask_typed(item, direction)
        else:
            quality = _ask_flashcard(item)

        outcome = service.record_review(progress, item.item_id, quality, _now())
        progress = outcome.progress
        tally.record(quality)
        if not outcome.saved:
            typer.secho(f"Warning: {outcome.warning}", fg="yellow", err=True)

    typer.secho("\nSession complete!", fg="green", bold=True)
    typer.echo(f"Correct: {tally.correct}  To review: {tally.incorrect}  Accuracy: {tally.accuracy}%")


def _ask_flashcard(item: VocabItem) -> int:
    typer.echo(f"  {item.hanzi}")
    typer.prompt("  Press Enter to reveal", default="", show_default=False)
    typer.echo(f"  {item.pinyin}  {item.english}")
    typer.echo("  " + "  ".join(f"{q.score}={q.label}" for q in REVIEW_QUALITIES))
    while True:
        raw = typer.prompt("  Quality", type=int)
        try:
            return validate_quality(raw)
        except InvalidQualityError as e:
            typer.secho(f"  {e}", fg="yellow")


def _ask_typed(item: VocabItem, direction: PracticeDirection) -> int:
    if direction == "chinese-to-english":
        question, expected = item.hanzi, item.english
        hint = "English"
    else:
        question, expected = item.english, f"{item.hanzi} ({item.pinyin})"
        hint = "hanzi or pinyin"

    typer.echo(f"  {question}")
    answer = typer.prompt(f"  Answer ({hint})", default="", show_default=False)
    correct = check_answer(answer, item, direction)
    if correct:
        typer.secho(f"  Correct! {expected}", fg="green")
    else:
        typer.secho(f"  Not quite. Answer: {expected}", fg="red")
    return quality_for_result(correct)


@app.command()
def review(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Vocabulary id, e.g. h1-001.")],
    quality: Annotated[int, typer.Argument(help="Recall grade 0 (forgot) to 5 (perfect).")],
):
    """Record a single review of one word."""
    try:
        validate_quality(quality)
    except InvalidQualityError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(2) from e

    config = _resolve_with_overrides(ctx)
    try:
        known = get_vocabulary(config, all_levels=True).get(item_id)
    except VocabularyError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e
    if known is None:
        typer.secho(f"Unknown vocabulary id: {item_id}", fg="red", err=True)
        raise typer.Exit(2)

    store = get_progress_store(config)
    outcome = ReviewService(store).record_review(store.load(), item_id, quality, _now())
    card = outcome.card

    typer.echo(
        f"{item_id}: next review in {card.interval} day(s) "
        f"(due {card.next_review_due:%Y-%m-%d %H:%M}), "
        f"repetitions={card.repetitions}, ease={card.ease_factor:.2f}"
    )
    if not outcome.saved:
        typer.secho(f"Warning: {outcome.warning}", fg="yellow", err=True)
        raise typer.Exit(1)


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show progress statistics."""
    config = _resolve_with_overrides(ctx)
    summary = StatsService(get_progress_store(config)).summary(_now())

    if json_output:
        typer.echo(json.dumps(asdict(summary), indent=2))
        return

    typer.echo(f"Words seen:   {summary.total_seen}")
    typer.echo(f"Learned:      {summary.learned_count}")
    typer.echo(f"Due now:      {summary.due_count}")
    typer.echo(f"Average ease: {summary.average_ease:.2f}")


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8778,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP API server."""
    import uvicorn

    uvicorn.run("hanzi_srs.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve_with_overrides(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
