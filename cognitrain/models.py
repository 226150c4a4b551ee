"""Records and value types shared by the ledger, streak tracker and dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum

MS_PER_DAY = 86_400_000
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today(now: datetime) -> date:
    """Calendar date of ``now`` in UTC (naive datetimes are taken as UTC)."""
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()


def epoch_ms(now: datetime) -> int:
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - EPOCH) // timedelta(milliseconds=1)


def yesterday_of(day: date) -> date:
    return day - timedelta(days=1)


def parse_day(raw) -> date | None:
    """Parse a stored YYYY-MM-DD string. Returns None for anything else."""
    if not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class ScoreRecord:
    """One completed game attempt."""

    game: str
    score: int
    difficulty: Difficulty
    date: date
    timestamp: int

    def to_dict(self) -> dict:
        # game is the key of the surrounding mapping, not part of the row
        return {
            "score": self.score,
            "difficulty": self.difficulty.value,
            "date": self.date.isoformat(),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, game: str, raw: dict) -> ScoreRecord:
        """Build a record from a persisted row.

        Raises ValueError (or TypeError/KeyError) when the row is malformed.
        """
        score = raw["score"]
        timestamp = raw["timestamp"]
        if isinstance(score, bool) or not isinstance(score, int):
            raise TypeError(f"score must be an integer, got {score!r}")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise TypeError(f"timestamp must be a number, got {timestamp!r}")
        if not math.isfinite(timestamp):
            raise ValueError(f"timestamp must be finite, got {timestamp!r}")
        day = parse_day(raw["date"])
        if day is None:
            raise ValueError(f"bad date: {raw['date']!r}")
        return cls(
            game=game,
            score=score,
            difficulty=Difficulty(raw["difficulty"]),
            date=day,
            timestamp=int(timestamp),
        )


@dataclass(frozen=True)
class StreakState:
    count: int = 0
    last_date: date | None = None

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "lastDate": self.last_date.isoformat() if self.last_date else None,
        }

    @classmethod
    def from_dict(cls, raw) -> StreakState:
        """Lenient parse: anything unusable falls back to the zero state."""
        if not isinstance(raw, dict):
            return cls()
        count = raw.get("count")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            count = 0
        return cls(count=count, last_date=parse_day(raw.get("lastDate")))


@dataclass(frozen=True)
class GameStats:
    played: int = 0
    best_score: int = 0
    average_score: int = 0
    last_played: date | None = None
