"""Dashboard summary — the numbers and message shown on the home screen."""

from __future__ import annotations

from dataclasses import dataclass, field

from cognitrain.config import GameConfig
from cognitrain.progress import Progress

LONG_STREAK = 7


@dataclass
class DashboardSummary:
    streak: int
    today_count: int
    total_count: int
    suggestion: str
    best_by_game: dict[str, int] = field(default_factory=dict)


def format_score(score: int) -> str:
    """Compact score text: 1234 -> "1.2k"."""
    if score >= 1000:
        # tenths rounded half up, as toFixed(1) does for these values
        tenths = (score + 50) // 100
        return f"{tenths // 10}.{tenths % 10}k"
    return str(score)


def daily_suggestion(today_count: int, streak: int, daily_goal: int = 3) -> str:
    if today_count == 0:
        text = "Start your day with a quick memory exercise!"
    elif today_count < daily_goal:
        remaining = daily_goal - today_count
        plural = "s" if remaining > 1 else ""
        text = f"Great start! Try {remaining} more exercise{plural} for a full session."
    else:
        text = f"Excellent work today! You've completed {today_count} exercises."

    if streak >= LONG_STREAK:
        text += f" {streak} day streak - keep it going!"
    return text


def build_summary(progress: Progress, games: list[GameConfig], daily_goal: int = 3) -> DashboardSummary:
    today = progress.today_count()
    streak = progress.current_streak()
    return DashboardSummary(
        streak=streak,
        today_count=today,
        total_count=progress.total_count(),
        suggestion=daily_suggestion(today, streak, daily_goal),
        best_by_game={g.id: progress.best_score(g.id) for g in games},
    )
