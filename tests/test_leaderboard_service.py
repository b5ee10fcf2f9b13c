"""Tests for the cross-user leaderboard."""

from unittest.mock import patch

import pytest

from app.services.leaderboard_service import leaderboard_service
from app.services.reading_store import ReadingStore
from app.services.toggle_service import toggle_service
from app.utils.exceptions import InputUnavailable


def complete(db_session, user, readings):
    for reading in readings:
        toggle_service.toggle(db_session, user.id, reading.id)


@pytest.fixture
def ten_due(make_reading):
    return [make_reading(-i) for i in range(10)]


def test_sorted_by_completed_count(db_session, make_user, ten_due, today):
    low, high, mid = make_user("Low"), make_user("High"), make_user("Mid")
    complete(db_session, low, ten_due[:1])
    complete(db_session, high, ten_due[:7])
    complete(db_session, mid, ten_due[:4])

    board = leaderboard_service.get_leaderboard(db_session, today)

    assert [e["name"] for e in board] == ["High", "Mid", "Low"]
    assert [e["rank"] for e in board] == [1, 2, 3]
    counts = [e["snapshot"]["completed_count"] for e in board]
    assert all(a >= b for a, b in zip(counts, counts[1:]))


def test_tie_is_deterministic_and_shares_rank(db_session, make_user, ten_due, today):
    a, b = make_user("A"), make_user("B")
    complete(db_session, a, ten_due[:5])
    complete(db_session, b, ten_due[5:])

    first = leaderboard_service.get_leaderboard(db_session, today)
    second = leaderboard_service.get_leaderboard(db_session, today)

    assert [e["user_id"] for e in first] == [e["user_id"] for e in second]
    assert [e["user_id"] for e in first] == sorted([str(a.id), str(b.id)])
    assert [e["rank"] for e in first] == [1, 1]
    assert all(e["snapshot"]["overdue_count"] == 5 for e in first)


def test_user_without_records_is_listed_last(db_session, make_user, ten_due, today):
    reader, newcomer = make_user("Reader"), make_user("Newcomer")
    complete(db_session, reader, ten_due[:2])

    board = leaderboard_service.get_leaderboard(db_session, today)

    assert board[-1]["name"] == "Newcomer"
    assert board[-1]["snapshot"]["completed_count"] == 0
    assert board[-1]["snapshot"]["overdue_count"] == 10
    assert board[-1]["snapshot"]["completion_percentage"] == 0.0


def test_same_due_set_for_everyone(db_session, make_user, make_reading, today):
    past, future = make_reading(-1), make_reading(3)
    early = make_user("Early")
    complete(db_session, early, [past, future])

    board = leaderboard_service.get_leaderboard(db_session, today)

    assert board[0]["snapshot"]["completed_count"] == 1
    assert board[0]["snapshot"]["due_count"] == 1


def test_missing_input_stops_the_ranking(db_session, make_user, ten_due, today):
    make_user()

    failure = InputUnavailable("Completion records could not be loaded")
    with patch.object(ReadingStore, "list_completion_records", side_effect=failure):
        with pytest.raises(InputUnavailable):
            leaderboard_service.get_leaderboard(db_session, today)


def test_cached_leaderboard_is_returned(db_session, today):
    cached = [{"rank": 1, "user_id": "u", "name": "Cached", "snapshot": {}}]

    with patch("app.services.leaderboard_service.cache_service") as cache:
        cache.get.return_value = cached
        assert leaderboard_service.get_leaderboard(db_session, today) == cached

    cache.set.assert_not_called()
