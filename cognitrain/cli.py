"""CogniTrain — command-line front-end to the progress store."""

import argparse
import logging
import sys
from pathlib import Path

from cognitrain.config import AppConfig, default_config, load_config
from cognitrain.dashboard import build_summary, format_score
from cognitrain.errors import CogniTrainError
from cognitrain.models import Difficulty
from cognitrain.progress import Progress


def _print_record_line(record) -> None:
    print(f"  {record.date.isoformat()}  {record.game:<16} {record.score:>6}  {record.difficulty.value}")


def cmd_record(progress: Progress, config: AppConfig, args) -> int:
    progress.record_outcome(args.game, args.score, args.difficulty)
    best = progress.best_score(args.game, args.difficulty)
    print(f"Saved {args.game}: {args.score} ({args.difficulty})")
    print(f"Best ({args.difficulty}): {best}   Streak: {progress.current_streak()} day(s)")
    return 0


def cmd_stats(progress: Progress, config: AppConfig, args) -> int:
    games = [args.game] if args.game else config.game_ids
    for game in games:
        s = progress.stats_for(game)
        last = s.last_played.isoformat() if s.last_played else "never"
        print(f"{game:<16} played={s.played:<4} best={format_score(s.best_score):<6} "
              f"avg={s.average_score:<6} last={last}")
    return 0


def cmd_streak(progress: Progress, config: AppConfig, args) -> int:
    print(progress.current_streak())
    return 0


def cmd_today(progress: Progress, config: AppConfig, args) -> int:
    records = progress.today_scores()
    print(f"{len(records)} exercise(s) today")
    for record in records:
        _print_record_line(record)
    return 0


def cmd_recent(progress: Progress, config: AppConfig, args) -> int:
    days = args.days if args.days is not None else config.scoring.recent_days
    grouped = progress.recent_scores(days)
    if not grouped:
        print(f"No exercises in the last {days} day(s)")
    for day in sorted(grouped):
        print(f"{day}: {len(grouped[day])} exercise(s)")
        for record in grouped[day]:
            _print_record_line(record)
    return 0


def cmd_dashboard(progress: Progress, config: AppConfig, args) -> int:
    summary = build_summary(progress, config.games, config.scoring.daily_goal)
    print(f"Streak: {summary.streak}   Today: {summary.today_count}   "
          f"Total: {format_score(summary.total_count)}")
    print(summary.suggestion)
    if args.out:
        # Pillow is only needed for the image
        from cognitrain.renderer import render_dashboard
        render_dashboard(summary, config.games).save(args.out)
        print(f"Dashboard written to {args.out}")
    return 0


def cmd_reset(progress: Progress, config: AppConfig, args) -> int:
    if not args.yes:
        print("Refusing to delete progress without --yes")
        return 1
    progress.reset()
    print("All progress cleared.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CogniTrain progress and streak tracker")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("record", help="Record a finished game")
    p.add_argument("game")
    p.add_argument("score", type=int)
    p.add_argument("--difficulty", "-d", default=Difficulty.MEDIUM.value,
                   choices=[d.value for d in Difficulty])
    p.set_defaults(handler=cmd_record)

    p = sub.add_parser("stats", help="Per-game statistics")
    p.add_argument("game", nargs="?")
    p.set_defaults(handler=cmd_stats)

    sub.add_parser("streak", help="Current streak").set_defaults(handler=cmd_streak)
    sub.add_parser("today", help="Today's exercises").set_defaults(handler=cmd_today)

    p = sub.add_parser("recent", help="Exercises grouped by day")
    p.add_argument("--days", type=int, default=None)
    p.set_defaults(handler=cmd_recent)

    p = sub.add_parser("dashboard", help="Summary, optionally rendered to PNG")
    p.add_argument("--out", help="PNG output path")
    p.set_defaults(handler=cmd_dashboard)

    p = sub.add_parser("reset", help="Delete all progress")
    p.add_argument("--yes", action="store_true", help="Confirm deletion")
    p.set_defaults(handler=cmd_reset)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    config = load_config(config_path) if config_path.exists() else default_config()

    progress = Progress.from_config(config)
    try:
        progress.initialize()
        return args.handler(progress, config, args)
    except CogniTrainError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
