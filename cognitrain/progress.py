"""Progress facade — the single object games and the dashboard talk to.

Typical lifecycle::

    progress = Progress(DurableStore("~/.cognitrain"))
    progress.initialize()
    progress.record_outcome("memory-match", 450, "easy")
    progress.current_streak()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from datetime import datetime

from cognitrain.config import AppConfig
from cognitrain.ledger import DEFAULT_CAP, SCORES_KEY, ScoreLedger
from cognitrain.models import (
    MS_PER_DAY,
    Difficulty,
    GameStats,
    ScoreRecord,
    epoch_ms,
    utc_now,
    utc_today,
)
from cognitrain.store import DurableStore, LoadError
from cognitrain.streak import STREAK_KEY, StreakTracker

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
LAST_PLAYED_KEY = "last_played"
ALL_KEYS = (SCORES_KEY, STREAK_KEY, LAST_PLAYED_KEY, SETTINGS_KEY)


class Progress:
    """Records outcomes and answers every aggregate query."""

    def __init__(
        self,
        store: DurableStore,
        clock: Callable[[], datetime] = utc_now,
        cap: int = DEFAULT_CAP,
        known_games: Collection[str] | None = None,
    ):
        self.store = store
        self.clock = clock
        self.ledger = ScoreLedger(store, clock=clock, cap=cap, known_games=known_games)
        self.streak = StreakTracker(store, clock=clock)
        self._ready = False

    @classmethod
    def from_config(cls, config: AppConfig, clock: Callable[[], datetime] = utc_now) -> Progress:
        store = DurableStore(config.storage.data_dir, prefix=config.storage.prefix)
        return cls(
            store,
            clock=clock,
            cap=config.scoring.retention_cap,
            known_games=config.game_ids,
        )

    # ── lifecycle ─────────────────────────────────────────────────────

    def initialize(self) -> None:
        """Load persisted state, seed first-run defaults, then re-evaluate the streak."""
        scores_error = self.ledger.load()
        if scores_error is not None:
            if scores_error is LoadError.CORRUPT:
                logger.warning("Stored scores were unreadable; starting from an empty ledger")
            self.ledger.persist()

        streak_error = self.streak.load()
        if streak_error is LoadError.CORRUPT:
            logger.warning("Stored streak was unreadable; starting from zero")

        self._ready = True
        # recompute persists the streak, covering the first-run default too
        self.recompute_streak()

    def reset(self) -> None:
        """Wipe every stored key and start over as on first run."""
        for key in ALL_KEYS:
            self.store.remove(key)
        self.ledger.clear()
        self.streak.reset()
        logger.info("All progress data cleared")
        self.initialize()

    def _require_ready(self) -> None:
        if not self._ready:
            raise RuntimeError("Progress.initialize() must be called first")

    # ── write path ────────────────────────────────────────────────────

    def record_outcome(self, game: str, score: int, difficulty: Difficulty | str) -> None:
        self._require_ready()
        # one clock reading so the record and the streak agree on the day
        now = self.clock()
        self.ledger.append(game, score, difficulty, now=now)
        self.recompute_streak(now)

    def recompute_streak(self, now: datetime | None = None) -> int:
        self._require_ready()
        if now is None:
            now = self.clock()
        today = utc_today(now)
        return self.streak.recompute(self.ledger.played_on(today), now=now).count

    # ── queries ───────────────────────────────────────────────────────

    def scores_for(self, game: str) -> list[ScoreRecord]:
        self._require_ready()
        return self.ledger.scores_for(game)

    def best_score(self, game: str, difficulty: Difficulty | str | None = None) -> int:
        self._require_ready()
        return self.ledger.best_score(game, difficulty)

    def stats_for(self, game: str) -> GameStats:
        self._require_ready()
        return self.ledger.stats_for(game)

    def total_count(self) -> int:
        self._require_ready()
        return self.ledger.total_count()

    def current_streak(self) -> int:
        self._require_ready()
        return self.streak.state.count

    def today_scores(self) -> list[ScoreRecord]:
        self._require_ready()
        today = utc_today(self.clock())
        return [r for r in self.ledger.records() if r.date == today]

    def today_count(self) -> int:
        return len(self.today_scores())

    def recent_scores(self, days: int = 7) -> dict[str, list[ScoreRecord]]:
        """Records from the last ``days`` days grouped by ISO date."""
        self._require_ready()
        cutoff = epoch_ms(self.clock()) - days * MS_PER_DAY
        grouped: dict[str, list[ScoreRecord]] = {}
        for record in self.ledger.records():
            if record.timestamp >= cutoff:
                grouped.setdefault(record.date.isoformat(), []).append(record)
        return grouped
