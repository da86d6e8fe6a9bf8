"""Command-line launcher for Classic Snake."""

from __future__ import annotations

import argparse
import logging
import sys

from classic_snake.config import GameConfig
from classic_snake.highscore import JsonHighScoreStore

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    # Options every subcommand accepts after its name.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    common.add_argument("--high-score-path", type=str, default=None)

    parser = argparse.ArgumentParser(
        prog="classic-snake",
        description="Classic Snake desktop game and high-score tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- play ---
    play_p = sub.add_parser("play", parents=[common], help="Open the game window.")
    play_p.add_argument("--grid-size", type=int, default=None)
    play_p.add_argument("--tick-rate-ms", type=int, default=None)
    play_p.add_argument("--cell-px", type=int, default=None)
    play_p.add_argument(
        "--seed", type=int, default=None,
        help="Seed food placement for a reproducible game.",
    )

    # --- high-score ---
    sub.add_parser("high-score", parents=[common], help="Print the stored high score.")
    sub.add_parser(
        "reset-high-score", parents=[common], help="Delete the stored high score.",
    )

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    return config.with_overrides(
        grid_size=getattr(args, "grid_size", None),
        tick_rate_ms=getattr(args, "tick_rate_ms", None),
        cell_px=getattr(args, "cell_px", None),
        high_score_path=args.high_score_path,
    )


def _run_play(args: argparse.Namespace, config: GameConfig) -> int:
    from classic_snake.frontend import run

    score = run(config, JsonHighScoreStore(config.high_score_path), seed=args.seed)
    print(f"Final score: {score}")  # noqa: T201
    return 0


def _run_high_score(args: argparse.Namespace, config: GameConfig) -> int:
    store = JsonHighScoreStore(config.high_score_path)
    try:
        score = store.read()
    except (OSError, ValueError) as exc:
        logger.error("Could not read high score: %s", exc)
        return 1
    print(score)  # noqa: T201
    return 0


def _run_reset_high_score(args: argparse.Namespace, config: GameConfig) -> int:
    JsonHighScoreStore(config.high_score_path).clear()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``classic-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = _load_config(args)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    handlers = {
        "play": _run_play,
        "high-score": _run_high_score,
        "reset-high-score": _run_reset_high_score,
    }
    return handlers[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
