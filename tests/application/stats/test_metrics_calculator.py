from datetime import timedelta

import pytest
from conftest import NOW, make_card

from hanzi_srs.application.stats import SessionTally, StatsService, summarize
from hanzi_srs.infrastructure.stores import InMemoryProgressStore


def test_summarize_empty():
    summary = summarize([], NOW)

    assert summary.total_seen == 0
    assert summary.learned_count == 0
    assert summary.due_count == 0
    assert summary.average_ease == 2.5


def test_summarize_counts():
    progress = [
        make_card("a", repetitions=0, due_in_days=-1, ease_factor=2.5),
        make_card("b", repetitions=2, due_in_days=3, ease_factor=2.36),
        make_card("c", repetitions=5, due_in_days=0, ease_factor=1.3),
    ]

    summary = summarize(progress, NOW)

    assert summary.total_seen == 3
    assert summary.learned_count == 2
    assert summary.due_count == 2
    assert summary.average_ease == 2.05  # 6.16 / 3


def test_summarize_average_ease_rounds_half_up():
    progress = [make_card("a", ease_factor=2.0), make_card("b", ease_factor=2.25)]

    assert summarize(progress, NOW).average_ease == 2.13  # 2.125


def test_summarize_due_count_moves_with_clock():
    progress = [make_card("a", due_in_days=3)]

    assert summarize(progress, NOW).due_count == 0
    assert summarize(progress, NOW + timedelta(days=3)).due_count == 1


def test_session_tally():
    tally = SessionTally()
    for quality in (5, 3, 1):
        tally.record(quality)

    assert tally.correct == 2
    assert tally.incorrect == 1
    assert tally.total == 3
    assert tally.accuracy == 67


def test_session_tally_empty_accuracy():
    assert SessionTally().accuracy == 0


def test_session_tally_accuracy_rounds_half_up():
    tally = SessionTally()
    for quality in (4, 2, 2, 2, 2, 2, 2, 2):
        tally.record(quality)

    assert tally.accuracy == 13  # 12.5%


def test_stats_service_reads_store():
    store = InMemoryProgressStore([make_card("a", repetitions=3, ease_factor=2.7)])

    summary = StatsService(store).summary(NOW)

    assert summary.total_seen == 1
    assert summary.learned_count == 1
    assert summary.average_ease == pytest.approx(2.7)
