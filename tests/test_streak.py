"""Tests for the streak transition rules and tracker persistence."""

from datetime import date

from cognitrain.models import StreakState
from cognitrain.streak import STREAK_KEY, StreakTracker, next_streak_state

TODAY = date(2024, 3, 10)
YESTERDAY = date(2024, 3, 9)
TWO_DAYS_AGO = date(2024, 3, 8)


def test_played_today_already_counted_is_unchanged():
    state = StreakState(count=4, last_date=TODAY)
    assert next_streak_state(state, TODAY, played_today=True) == state


def test_played_today_after_yesterday_continues():
    state = StreakState(count=4, last_date=YESTERDAY)
    assert next_streak_state(state, TODAY, True) == StreakState(count=5, last_date=TODAY)


def test_played_today_after_gap_restarts():
    state = StreakState(count=9, last_date=TWO_DAYS_AGO)
    assert next_streak_state(state, TODAY, True) == StreakState(count=1, last_date=TODAY)


def test_first_ever_play_starts_at_one():
    assert next_streak_state(StreakState(), TODAY, True) == StreakState(count=1, last_date=TODAY)


def test_no_play_after_gap_breaks_streak():
    state = StreakState(count=5, last_date=TWO_DAYS_AGO)
    assert next_streak_state(state, TODAY, False) == StreakState(count=0, last_date=TWO_DAYS_AGO)


def test_no_play_with_yesterday_is_grace():
    state = StreakState(count=5, last_date=YESTERDAY)
    assert next_streak_state(state, TODAY, False) == state


def test_no_play_never_played_stays_zero():
    assert next_streak_state(StreakState(), TODAY, False) == StreakState()


def test_state_round_trips_through_dict():
    raw = StreakState(count=2, last_date=YESTERDAY).to_dict()
    assert raw == {"count": 2, "lastDate": "2024-03-09"}
    assert StreakState.from_dict({"count": 0, "lastDate": None}) == StreakState()


def test_malformed_state_falls_back_to_zero():
    assert StreakState.from_dict("nope") == StreakState()
    assert StreakState.from_dict({"count": -3, "lastDate": "yesterday"}) == StreakState()


def test_tracker_persists_even_without_change(store, clock):
    tracker = StreakTracker(store, clock=clock)
    tracker.load()
    tracker.recompute(played_today=False)
    assert store.read(STREAK_KEY) == {"count": 0, "lastDate": None}


def test_tracker_loads_and_breaks_stale_streak(store, clock):
    store.write(STREAK_KEY, {"count": 5, "lastDate": "2024-03-08"})
    tracker = StreakTracker(store, clock=clock)
    assert tracker.load() is None
    assert tracker.state.count == 5

    tracker.recompute(played_today=False)
    assert tracker.state == StreakState(count=0, last_date=TWO_DAYS_AGO)
    assert store.read(STREAK_KEY)["count"] == 0
