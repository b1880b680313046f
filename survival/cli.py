"""
Survival CLI - Command-line interface for the engine.

Usage:
    survival play [--variant unlock] [--seed N]     Play in the terminal
    survival rules [--variant classic]              Show a variant's rules

During play, enter w/a/s/d (or up/down/left/right) and press Enter.
Enter q to quit.
"""

import argparse
import sys

from . import config
from .api import GameService, ErrorResponse
from .rules import RuleVariant, ruleset_for, validate_ruleset
from .render import render, RESOURCE_GLYPHS
from .utils.logging_config import setup_logging

QUIT_COMMANDS = {"q", "quit", "exit"}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Survival Grid - two-player resource gathering game",
        prog="survival",
    )
    parser.add_argument(
        "--log-level", default=config.SURVIVAL_LOG_LEVEL, help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    variants = [v.value for v in RuleVariant]

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--variant", choices=variants, default=None)
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--grid-size", type=int, default=None)
    play_parser.add_argument("--duration", type=int, default=None, help="Seconds on the clock")
    play_parser.add_argument("--player1", default=None, help="Player 1 name")
    play_parser.add_argument("--player2", default=None, help="Player 2 name")

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="Show a variant's rules")
    rules_parser.add_argument("--variant", choices=variants, default=config.DEFAULT_VARIANT)

    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, format_style=config.SURVIVAL_LOG_FORMAT)

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "rules":
        return cmd_rules(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_rules(args):
    """Print the parameters of a variant."""
    rules = ruleset_for(args.variant)
    print(f"Variant: {rules.name}")
    print(f"Grid: {rules.grid_size}x{rules.grid_size}")
    print(f"Clock: {rules.duration_ms // 1000} seconds")
    print(f"Starting stock: {rules.starting_stock} of each resource")
    if rules.resource_amount is None:
        print("Resources: infinite, respawn away from players")
    else:
        print(f"Resources: {rules.resource_amount} per pile, gone when empty")
    if rules.unlock_threshold is not None:
        print(f"Collect {rules.unlock_threshold} wood to unlock food and water")
    if rules.goal_target is not None:
        print(f"Win: {rules.goal_target} food, water and wood")
    if rules.max_moves is not None:
        print(f"Lose: reach {rules.max_moves} moves")
    if rules.lose_on_empty_stock:
        print("Lose: any resource at zero")
    print("Time's up: most food + water + wood wins")
    print("Legend: " + ", ".join(f"{g} = {k.value}" for k, g in RESOURCE_GLYPHS.items()))

    result = validate_ruleset(rules)
    for warning in result.warnings:
        print(f"  - {warning}")


def cmd_play(args):
    """Run one game in the terminal."""
    service = GameService()

    response = None
    names = [args.player1, args.player2]
    while response is None or isinstance(response, ErrorResponse):
        if isinstance(response, ErrorResponse):
            print(f"Error: {response.error}")
            for detail in response.details or []:
                print(f"  - {detail}")
            names = [None, None]

        players = []
        for i, name in enumerate(names, start=1):
            if name is None:
                name = _prompt(f"Player {i} Name: ")
            players.append({"name": name, "portrait": name[:1].upper() if name else ""})

        response = service.create_game({
            "players": players,
            "variant": args.variant,
            "grid_size": args.grid_size,
            "duration_seconds": args.duration,
            "random_seed": args.seed,
        })

    session_id = response.session_id
    session = service.session_manager.get_session(session_id)
    session.game_loop.subscribe(_announce_timeout)

    try:
        print(render(session.game_state))
        while not session.game_state.is_over:
            command = _prompt("Move (w/a/s/d, q to quit): ").strip().lower()
            if command in QUIT_COMMANDS:
                print("Game abandoned.")
                break
            if not command:
                continue

            turn = service.move(session_id, command)
            if isinstance(turn, ErrorResponse):
                print(f"Error: {turn.error}")
                continue

            for notice in turn.notices:
                print(f"! {notice}")
            print(render(session.game_state))
    finally:
        service.end_game(session_id)
    return 0


def _announce_timeout(turn):
    # Runs on the clock thread; ticks carry no changes, moves report their own outcome
    if turn.game_over and turn.success and not turn.changes:
        print(f"\n{turn.outcome.message}")
        print("Press Enter to finish.")


def _prompt(text: str) -> str:
    try:
        return input(text)
    except EOFError:
        return "q"


if __name__ == "__main__":
    main()
