"""Config loader — YAML to dataclasses."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class StorageConfig:
    data_dir: str = "~/.cognitrain"
    prefix: str = "cognitrain_"


@dataclass
class ScoringConfig:
    retention_cap: int = 100
    recent_days: int = 7
    daily_goal: int = 3


@dataclass
class GameConfig:
    id: str
    title: str | None = None
    category: str | None = None  # "memory" | "attention" | "reasoning"
    bg: str = "#1e3a5f"


DEFAULT_GAMES = [
    GameConfig(id="memory-match", title="Memory Match", category="memory", bg="#1e3a5f"),
    GameConfig(id="sequence-recall", title="Sequence Recall", category="memory", bg="#4c1d95"),
    GameConfig(id="stroop-test", title="Stroop Test", category="attention", bg="#991b1b"),
    GameConfig(id="flanker-task", title="Flanker Task", category="attention", bg="#065f46"),
    GameConfig(id="pattern-puzzle", title="Pattern Puzzle", category="reasoning", bg="#7c3aed"),
]


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    games: list[GameConfig] = field(default_factory=lambda: list(DEFAULT_GAMES))

    @property
    def game_ids(self) -> list[str]:
        return [g.id for g in self.games]


def default_config() -> AppConfig:
    return AppConfig()


def load_config(path: Path) -> AppConfig:
    """Load config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    storage = StorageConfig(**{k: v for k, v in (raw.get("storage") or {}).items()})
    scoring = ScoringConfig(**{k: v for k, v in (raw.get("scoring") or {}).items()})
    if raw.get("games"):
        games = [GameConfig(**g) for g in raw["games"]]
    else:
        games = list(DEFAULT_GAMES)

    return AppConfig(storage=storage, scoring=scoring, games=games)
