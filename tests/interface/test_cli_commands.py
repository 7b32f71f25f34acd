"""Tests for CLI commands: help, session, review, stats, config, verbosity, serve."""

import json
import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from hanzi_srs.domain.errors import ProgressStoreError
from hanzi_srs.infrastructure.stores import JsonProgressStore
from hanzi_srs.interface.cli import app

runner = CliRunner()


def _progress(mock_home):
    return JsonProgressStore(mock_home / ".config/hanzi-srs/progress.json").load()


# --- Help ---


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Spaced-repetition practice" in result.stdout
    assert "practice" in result.stdout
    assert "stats" in result.stdout


# --- Session ---


def test_session_preview_new_words():
    result = runner.invoke(app, ["session", "--level", "1", "--new-limit", "3", "--seed", "1"])

    assert result.exit_code == 0
    assert "Next session: 3 words" in result.stdout
    for hanzi in ("你好", "谢谢", "再见"):
        assert hanzi in result.stdout


def test_session_json():
    result = runner.invoke(
        app, ["session", "-l", "2", "--new-limit", "2", "--due-limit", "0", "--json"]
    )

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert {d["item_id"] for d in data} == {"h2-001", "h2-002"}
    assert all(d["level"] == 2 for d in data)


def test_session_empty_is_caught_up():
    result = runner.invoke(app, ["session", "--new-limit", "0"])

    assert result.exit_code == 0
    assert "All caught up!" in result.stdout


def test_session_bad_vocabulary_file(monkeypatch, tmp_path):
    monkeypatch.setenv("HANZI_SRS_VOCABULARY_PATH", str(tmp_path / "missing.yaml"))

    result = runner.invoke(app, ["session"])

    assert result.exit_code == 1


def test_session_invalid_limit():
    result = runner.invoke(app, ["session", "--due-limit", "-2"])

    assert result.exit_code == 2


# --- Review ---


def test_review_records_progress(mock_home):
    result = runner.invoke(app, ["review", "h1-001", "5"])
    assert result.exit_code == 0
    assert "next review in 1 day(s)" in result.stdout

    result = runner.invoke(app, ["review", "h1-001", "5"])
    assert result.exit_code == 0
    assert "next review in 6 day(s)" in result.stdout

    (card,) = _progress(mock_home)
    assert card.item_id == "h1-001"
    assert card.repetitions == 2


def test_review_invalid_quality(mock_home):
    result = runner.invoke(app, ["review", "h1-001", "7"])

    assert result.exit_code == 2
    assert _progress(mock_home) == []


def test_review_unknown_item_rejected(mock_home):
    result = runner.invoke(app, ["review", "h1-0001", "4"])

    assert result.exit_code == 2
    assert "Unknown vocabulary id: h1-0001" in result.output
    assert _progress(mock_home) == []


def test_review_accepts_item_outside_configured_levels(mock_home, monkeypatch):
    monkeypatch.setenv("HANZI_SRS_LEVELS", "[1]")

    result = runner.invoke(app, ["review", "h2-001", "4"])

    assert result.exit_code == 0
    assert [card.item_id for card in _progress(mock_home)] == ["h2-001"]


def test_review_save_failure_warns():
    with patch.object(JsonProgressStore, "save", side_effect=ProgressStoreError("disk full")):
        result = runner.invoke(app, ["review", "h1-001", "4"])

    assert result.exit_code == 1
    assert "not saved" in result.output


# --- Stats ---


def test_stats_empty():
    result = runner.invoke(app, ["stats", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "total_seen": 0,
        "learned_count": 0,
        "due_count": 0,
        "average_ease": 2.5,
    }


def test_stats_after_reviews():
    runner.invoke(app, ["review", "h1-001", "5"])
    runner.invoke(app, ["review", "h1-002", "1"])

    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0
    assert "Words seen:   2" in result.stdout
    assert "Due now:      0" in result.stdout


# --- Config ---


def test_config_show(mock_home):
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["due_limit"] == 15
    assert data["progress_path"] == str(mock_home / ".config/hanzi-srs/progress.json")


# --- Verbosity ---


@pytest.fixture
def root_log_level():
    root = logging.getLogger()
    saved = root.level
    yield root
    root.setLevel(saved)


def test_configured_verbosity_sets_log_level(monkeypatch, root_log_level):
    monkeypatch.setenv("HANZI_SRS_VERBOSE", "0")

    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0
    assert root_log_level.level == logging.WARNING


def test_verbose_flag_overrides_configured_verbosity(monkeypatch, root_log_level):
    monkeypatch.setenv("HANZI_SRS_VERBOSE", "0")

    result = runner.invoke(app, ["-v", "stats"])

    assert result.exit_code == 0
    assert root_log_level.level == logging.DEBUG


def test_quiet_flag(root_log_level):
    result = runner.invoke(app, ["-q", "config", "show"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["verbose"] == 0
    assert root_log_level.level == logging.WARNING


# --- Serve ---


@patch("uvicorn.run")
def test_serve_command(mock_run):
    result = runner.invoke(app, ["serve", "--port", "9000"])
    assert result.exit_code == 0
    mock_run.assert_called_with("hanzi_srs.server:app", host="127.0.0.1", port=9000, reload=False)
