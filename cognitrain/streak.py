"""Consecutive-day play streak."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime

from cognitrain.models import StreakState, utc_now, utc_today, yesterday_of
from cognitrain.store import DurableStore, LoadError

logger = logging.getLogger(__name__)

STREAK_KEY = "streak"


def next_streak_state(current: StreakState, today: date, played_today: bool) -> StreakState:
    """Apply the day-boundary rules to ``current``.

    - played today, already counted today: unchanged
    - played today, last counted yesterday: streak continues (+1)
    - played today, any older or no last date: streak restarts at 1
    - not played today, last date older than yesterday: streak lapses to 0
    - not played today, last date today or yesterday: unchanged (grace)
    """
    recent = current.last_date in (today, yesterday_of(today))
    if played_today:
        if current.last_date == today:
            return current
        if recent:
            return StreakState(count=current.count + 1, last_date=today)
        return StreakState(count=1, last_date=today)
    if recent:
        return current
    return StreakState(count=0, last_date=current.last_date)


class StreakTracker:
    """Holds the persisted streak and re-evaluates it against the clock."""

    def __init__(self, store: DurableStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock
        self.state = StreakState()

    def load(self) -> LoadError | None:
        result = self.store.try_load(STREAK_KEY)
        if not result.ok:
            self.state = StreakState()
            return result.error
        self.state = StreakState.from_dict(result.value)
        return None

    def persist(self) -> None:
        self.store.write(STREAK_KEY, self.state.to_dict())

    def reset(self) -> None:
        self.state = StreakState()

    def recompute(self, played_today: bool, now: datetime | None = None) -> StreakState:
        today = utc_today(now if now is not None else self.clock())
        previous = self.state
        self.state = next_streak_state(previous, today, played_today)
        if self.state != previous:
            logger.info(f"Streak {previous.count} -> {self.state.count} (last played {self.state.last_date})")
        # Written even when unchanged so the file always reflects the last evaluation.
        self.persist()
        return self.state
