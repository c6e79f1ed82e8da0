"""Tests for the player history buffer."""

from datetime import datetime, timedelta

from monitors.history import PlayerHistory


START = datetime(2024, 5, 1, 12, 0)


def test_polls_within_the_hour_share_one_bucket():
    history = PlayerHistory()
    for minute, count in enumerate([3, 7, 4, 9]):
        history.record("srv", count, capacity=24, now=START + timedelta(minutes=minute * 10))

    samples = history.get("srv")
    assert len(samples) == 1
    assert samples[0].count == 9
    assert samples[0].timestamp == START


def test_new_bucket_after_an_hour():
    history = PlayerHistory()
    history.record("srv", 1, now=START)
    history.record("srv", 2, now=START + timedelta(minutes=59, seconds=59))
    history.record("srv", 3, now=START + timedelta(hours=1))

    assert [s.count for s in history.get("srv")] == [2, 3]


def test_capacity_evicts_oldest_first():
    history = PlayerHistory()
    for hour in range(10):
        history.record("srv", hour, capacity=4, now=START + timedelta(hours=hour))

    samples = history.get("srv")
    assert len(samples) == 4
    assert [s.count for s in samples] == [6, 7, 8, 9]
    assert samples[0].timestamp == START + timedelta(hours=6)


def test_servers_are_independent():
    history = PlayerHistory()
    history.record("a", 1, now=START)
    history.record("b", 5, now=START)
    history.record("b", 6, now=START + timedelta(hours=2))

    assert [s.count for s in history.get("a")] == [1]
    assert [s.count for s in history.get("b")] == [5, 6]
    assert len(history) == 2


def test_get_returns_a_snapshot():
    history = PlayerHistory()
    history.record("srv", 1, now=START)

    snapshot = history.get("srv")
    snapshot[0].count = 100
    snapshot.clear()

    assert [s.count for s in history.get("srv")] == [1]


def test_unknown_server_is_empty():
    assert PlayerHistory().get("missing") == []


def test_clear():
    history = PlayerHistory()
    history.record("a", 1, now=START)
    history.record("b", 1, now=START)

    history.clear("a")
    assert history.get("a") == []
    assert len(history.get("b")) == 1

    history.clear()
    assert len(history) == 0
