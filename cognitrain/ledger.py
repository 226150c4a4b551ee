"""Score ledger: capped per-game history of outcomes and its aggregates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterator
from datetime import date, datetime

from cognitrain.errors import InvalidOutcomeError
from cognitrain.models import (
    Difficulty,
    GameStats,
    ScoreRecord,
    epoch_ms,
    utc_now,
    utc_today,
)
from cognitrain.store import DurableStore, LoadError

logger = logging.getLogger(__name__)

SCORES_KEY = "scores"
DEFAULT_CAP = 100


def rounded_mean(values: list[int]) -> int:
    """Mean rounded half-up to the nearest integer, 0 for no values."""
    if not values:
        return 0
    n = len(values)
    return (2 * sum(values) + n) // (2 * n)


class ScoreLedger:
    """Per-game append-only history, trimmed to the most recent ``cap`` entries."""

    def __init__(
        self,
        store: DurableStore,
        clock: Callable[[], datetime] = utc_now,
        cap: int = DEFAULT_CAP,
        known_games: Collection[str] | None = None,
    ):
        if cap < 1:
            raise ValueError(f"cap must be positive, got {cap}")
        self.store = store
        self.clock = clock
        self.cap = cap
        self.known_games = set(known_games) if known_games else None
        self._scores: dict[str, list[ScoreRecord]] = {}

    # ── persistence ───────────────────────────────────────────────────

    def load(self) -> LoadError | None:
        """Replace in-memory state with the stored ledger.

        Returns the load error when the stored payload was unusable, in
        which case the ledger starts empty.
        """
        result = self.store.try_load(SCORES_KEY)
        self._scores = {}
        if not result.ok:
            if result.error is LoadError.MISSING:
                logger.debug("No stored scores, starting with an empty ledger")
            return result.error

        raw = result.value
        if not isinstance(raw, dict):
            logger.warning(f"Stored scores are a {type(raw).__name__}, not a mapping; ignoring")
            return LoadError.CORRUPT

        for game, rows in raw.items():
            if not isinstance(rows, list):
                logger.warning(f"Dropping non-list history for '{game}'")
                continue
            records = []
            for row in rows:
                try:
                    records.append(ScoreRecord.from_dict(game, row))
                except (KeyError, TypeError, ValueError) as e:
                    # Skip malformed rows and keep the rest of the history.
                    logger.warning(f"Skipping malformed '{game}' row {row!r}: {e}")
            self._scores[game] = records[-self.cap:]
        logger.info(f"Loaded {self.total_count()} score(s) across {len(self._scores)} game(s)")
        return None

    def persist(self) -> None:
        self.store.write(SCORES_KEY, {
            game: [r.to_dict() for r in records]
            for game, records in self._scores.items()
        })

    # ── write path ────────────────────────────────────────────────────

    def validate(self, game, score, difficulty) -> Difficulty:
        if not isinstance(game, str) or not game:
            raise InvalidOutcomeError(f"game id must be a non-empty string, got {game!r}")
        if self.known_games is not None and game not in self.known_games:
            raise InvalidOutcomeError(f"unknown game id: {game!r}")
        if isinstance(score, bool) or not isinstance(score, int):
            raise InvalidOutcomeError(f"score must be an integer, got {score!r}")
        if score < 0:
            raise InvalidOutcomeError(f"score must be non-negative, got {score}")
        try:
            return Difficulty(difficulty)
        except ValueError:
            raise InvalidOutcomeError(f"unknown difficulty: {difficulty!r}") from None

    def append(
        self,
        game: str,
        score: int,
        difficulty: Difficulty | str,
        now: datetime | None = None,
    ) -> ScoreRecord:
        """Record one outcome stamped with ``now`` (default: the clock), then persist."""
        level = self.validate(game, score, difficulty)
        if now is None:
            now = self.clock()
        record = ScoreRecord(
            game=game,
            score=score,
            difficulty=level,
            date=utc_today(now),
            timestamp=epoch_ms(now),
        )
        history = self._scores.setdefault(game, [])
        history.append(record)
        if len(history) > self.cap:
            del history[:-self.cap]
        self.persist()
        logger.info(f"Recorded {game} score={score} difficulty={level.value}")
        return record

    def clear(self) -> None:
        self._scores = {}

    # ── queries ───────────────────────────────────────────────────────

    def games(self) -> list[str]:
        return [g for g, records in self._scores.items() if records]

    def scores_for(self, game: str) -> list[ScoreRecord]:
        return list(self._scores.get(game, []))

    def records(self) -> Iterator[ScoreRecord]:
        """Every record, games in ledger order and records oldest first."""
        for records in self._scores.values():
            yield from records

    def played_on(self, day: date) -> bool:
        return any(r.date == day for r in self.records())

    def best_score(self, game: str, difficulty: Difficulty | str | None = None) -> int:
        records = self._scores.get(game, [])
        if difficulty:
            try:
                level = Difficulty(difficulty)
            except ValueError:
                return 0
            records = [r for r in records if r.difficulty is level]
        return max((r.score for r in records), default=0)

    def total_count(self) -> int:
        return sum(len(records) for records in self._scores.values())

    def stats_for(self, game: str) -> GameStats:
        records = self._scores.get(game, [])
        if not records:
            return GameStats()
        values = [r.score for r in records]
        return GameStats(
            played=len(records),
            best_score=max(values),
            average_score=rounded_mean(values),
            last_played=records[-1].date,
        )
