# Area: Shared
"""
word_conquest.cli — Command-line interface
==========================================

Provides the CLI entry point for playing in a terminal.

Usage:
    python -m word_conquest --nickname Ada              # Interactive play
    python -m word_conquest --demo --seed 7             # Autoplay demo
    python -m word_conquest --config settings.json      # Custom settings

Settings are resolved in this order (later wins):
    1. Built-in defaults
    2. JSON config file (--config)
    3. Environment variables (WORD_CONQUEST_*, .env is loaded first)
    4. CLI flags
"""

import argparse
import os
import random
import sys
from typing import Optional

from dotenv import load_dotenv

from ._config import GRADE_CONFIG, GameSettings, load_settings
from ._quiz.question_bank import JsonQuestionBank, QuestionProvider, StaticQuestionBank
from ._shared.logging_config import setup_logging
from ._shared.scheduler import Scheduler, scaled_clock
from ._store.store import GameStore
from .errors import ConfigurationInvariantError
from .runner import DemoRunner, GameRunner


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Word Conquest - explore the map, win vocabulary duels, claim territory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m word_conquest --nickname Ada
  python -m word_conquest --demo --seed 7 --speed 4
  python -m word_conquest --config settings.json --grade grade6
  WORD_CONQUEST_MAP_SIZE=20 python -m word_conquest --demo
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON settings file",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible map and opponents",
    )

    parser.add_argument(
        "--size",
        type=int,
        help="Map side length (default 50)",
    )

    parser.add_argument(
        "--grade",
        choices=sorted(GRADE_CONFIG),
        help="Player grade (selects the question set)",
    )

    parser.add_argument(
        "--nickname",
        type=str,
        help="Player nickname; skips the setup step when given",
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Autoplay with a scripted player",
    )

    parser.add_argument(
        "--demo-accuracy",
        type=float,
        default=0.8,
        help="Probability the scripted player answers correctly (default 0.8)",
    )

    parser.add_argument(
        "--demo-quizzes",
        type=int,
        default=5,
        help="Number of quizzes the demo plays before stopping (default 5)",
    )

    parser.add_argument(
        "--speed",
        type=float,
        default=1.0,
        help="Game clock multiplier, e.g. 4 runs timers four times faster",
    )

    parser.add_argument(
        "--color",
        action="store_true",
        help="Use ANSI colors in the map view",
    )

    return parser.parse_args(argv)


def build_question_provider(settings: GameSettings) -> QuestionProvider:
    if settings.question_bank_path:
        return JsonQuestionBank(settings.question_bank_path)
    return StaticQuestionBank()


def build_store(settings: GameSettings, speed: float = 1.0) -> GameStore:
    """Wire a store with a (possibly sped-up) scheduler and seeded rng."""
    clock = scaled_clock(speed) if speed != 1.0 else None
    return GameStore(
        settings=settings,
        question_provider=build_question_provider(settings),
        scheduler=Scheduler(clock=clock),
        rng=random.Random(settings.seed),
    )


def is_demo_mode(args: argparse.Namespace) -> bool:
    """Check if demo mode is enabled via CLI or environment."""
    if args.demo:
        return True
    return os.environ.get("WORD_CONQUEST_DEMO", "").lower() in ("true", "1", "yes")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            map_size=args.size,
            seed=args.seed,
            default_grade=args.grade,
        )
    except ConfigurationInvariantError as e:
        print(e.format_error_log(), file=sys.stderr)
        return 1

    setup_logging(log_file_path=settings.log_file, level=settings.log_level)

    try:
        store = build_store(settings, speed=args.speed)
    except (ConfigurationInvariantError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    demo = is_demo_mode(args)
    nickname = args.nickname or ("Demo" if demo else None)
    if nickname:
        store.set_nickname(nickname)
        if not store.start_game():
            print("Error: nickname too short", file=sys.stderr)
            return 1

    if demo:
        DemoRunner(
            store,
            accuracy=args.demo_accuracy,
            max_quizzes=args.demo_quizzes,
            rng=random.Random(settings.seed),
        ).run()
    else:
        GameRunner(store, use_color=args.color).run()
    return 0
