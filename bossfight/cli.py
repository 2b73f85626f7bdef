"""
Boss fight - command line entry point.

Usage:
    bossfight                   # fight the boss
    bossfight --demo            # tutorial boss that only defends
    bossfight --seed 42         # reproducible boss moves
    bossfight --config battle.json --log-level DEBUG
    bossfight --keys            # read moves from a pygame window (keys 1-5)

Exit codes:
    0 - boss defeated
    1 - player defeated
    2 - player fled
    3 - configuration error
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

import pygame

from arena.core.config import ConfigError, load_config
from arena.core.events import EventBus
from arena.core.rng import create_rng
from arena.input.handler import ConsoleCommandReader, InputHandler
from bossfight.battle import BattleOutcome, GameLedger, Hero, PlayerCommand, run_battle
from bossfight.presentation.console import ConsolePresenter

logger = logging.getLogger(__name__)

EXIT_CODES = {
    BattleOutcome.WON: 0,
    BattleOutcome.LOST: 1,
    BattleOutcome.FLED: 2,
}
EXIT_CONFIG_ERROR = 3

WINDOW_SIZE = (480, 120)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bossfight",
        description="Turn-based boss battle. Predict the boss's move; the rules change as it weakens.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--demo", action="store_true", help="Tutorial boss that only defends")
    parser.add_argument("--seed", "-s", type=int, help="RNG seed for reproducible battles")
    parser.add_argument("--config", "-c", help="JSON file overriding battle settings")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--keys", action="store_true", help="Read moves from a pygame window instead of the terminal")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        write(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    if args.seed is not None:
        config.seed = args.seed
    if args.log_level:
        config.log_level = args.log_level.upper()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bus = EventBus()
    presenter = ConsolePresenter(bus, write=write)

    if args.keys:
        pygame.init()
        pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("Boss Fight - press 1-5")
        handler = InputHandler(bus)
        read_action = handler.wait_for_action
    else:
        reader = ConsoleCommandReader(
            read_line=read_line,
            policy=config.invalid_input_policy,
            default_action=config.default_action,
            notify=presenter.emit,
        )
        read_action = reader.read_action

    hero = Hero.with_hp(config.player_max_hp, config.player_max_hp)
    ledger = GameLedger(hp=config.player_max_hp)

    try:
        outcome = run_battle(
            hero,
            args.demo,
            action_source=lambda: PlayerCommand.from_input(read_action()),
            rng=create_rng(config.seed),
            config=config,
            events=bus,
            ledger=ledger,
            on_round_start=presenter.show_status,
        )
    finally:
        if args.keys:
            pygame.quit()

    logger.info(
        f"Battle finished: {outcome.name}, "
        f"{ledger.hits_taken} hits for {ledger.damage_taken} damage"
    )
    return EXIT_CODES[outcome]


if __name__ == "__main__":
    sys.exit(main())
