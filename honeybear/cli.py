#!/usr/bin/env python3
"""
Headless HoneyBear runner.

Drives the engine the way a presentation layer would, without drawing
anything: resumes a saved game (or starts a new one), moves the bear on a
random walk, ticks at a fixed rate while the background movers run, and
saves the game on the way out if the bear survived.

Usage:
    python -m honeybear
    python -m honeybear --ticks 2000 --seed 7
    python -m honeybear --new --name Bamse --log-level DEBUG
"""

import argparse
import random
import time
from pathlib import Path
from typing import List, Optional

from honeybear import config
from honeybear.config import FieldSettings
from honeybear.game import GameController
from honeybear.logging import configure_logging, get_logger
from honeybear.models import Direction, HighScore

log = get_logger('cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Run a headless HoneyBear game with a random-walk bear',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--ticks', type=int, default=600,
                        help='Number of spawn/collision ticks to run (default: 600)')
    parser.add_argument('--tick-interval', type=float, default=config.TICK_INTERVAL,
                        help='Seconds between ticks')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for lanes, spawns and the random walk')
    parser.add_argument('--new', action='store_true',
                        help='Ignore any saved game and start fresh')
    parser.add_argument('--save-file', type=Path, default=Path(config.SAVE_FILE),
                        help=f'Save file path (default: {config.SAVE_FILE})')
    parser.add_argument('--name', default='bear',
                        help='Name recorded in the high score list')
    parser.add_argument('--log-level', default='INFO',
                        help='TRACE, DEBUG, INFO, WARNING, ERROR or OFF')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    rng = random.Random(args.seed)
    settings = FieldSettings(save_file=args.save_file)
    controller = GameController(settings=settings, rng=random.Random(rng.random()))

    if not args.new and controller.can_load_game():
        controller.load_game()
    else:
        controller.new_game()

    directions = list(Direction)
    stings = eaten = 0

    for _ in range(args.ticks):
        controller.move_player(rng.choice(directions))
        result = controller.tick()
        stings += result.stings
        eaten += result.honey_eaten
        if result.game_over:
            break
        time.sleep(args.tick_interval)

    print(f"Honey eaten this run: {eaten}, stings: {stings}")

    if controller.is_game_over():
        controller.add_high_score(HighScore(name=args.name, score=controller.score))
        print("Game over!")
        for rank, entry in enumerate(controller.high_scores, start=1):
            print(f"  {rank}. {entry}")
        controller.shutdown()
        return 0

    bear = controller.bear
    print(f"Score: {controller.score}, lives left: {bear.lives}; saving to {args.save_file}")
    controller.exit()


if __name__ == "__main__":
    raise SystemExit(main())
