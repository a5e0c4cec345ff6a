#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert,custom}]
                        [--rows R --cols C --mines M] [--seed S]
    python main.py simulate [--games N] [--difficulty D] [--seed S]
"""
import argparse
import logging
from typing import Optional

import numpy as np

from src.minesweeper.board import get_observation
from src.minesweeper.environment import MinesweeperEnv, REVEAL, render_ansi
from src.minesweeper.game import Game, GameStatus
from src.minesweeper.settings import Difficulty, GameSettings, resolve_settings


PLAY_HELP = """Commands:
  r X Y   reveal cell at column X, row Y
  f X Y   toggle flag
  c X Y   open neighbours of a numbered cell
  n       new game
  d NAME  change difficulty (beginner, intermediate, expert)
  q       quit"""


def _custom_settings(args: argparse.Namespace) -> Optional[GameSettings]:
    """Build custom settings when the difficulty asks for them."""
    if args.difficulty != Difficulty.CUSTOM.value:
        return None
    return GameSettings(rows=args.rows, cols=args.cols, mines=args.mines)


def print_game(game: Game) -> None:
    """Print the status line and the board."""
    print(
        f"Mines: {game.mines_remaining:03d}  "
        f"Time: {game.elapsed_seconds:03d}  "
        f"[{game.status.value}]"
    )
    print(render_ansi(get_observation(game.board)))


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    game = Game(
        Difficulty(args.difficulty),
        _custom_settings(args),
        seed=args.seed,
    )
    print(PLAY_HELP)

    try:
        while True:
            print()
            print_game(game)
            try:
                line = input("> ").strip().split()
            except EOFError:
                break
            if not line:
                continue

            command = line[0].lower()
            if command == "q":
                break
            if command == "n":
                game.reset_game()
                continue
            if command == "d" and len(line) == 2:
                try:
                    game.change_difficulty(Difficulty(line[1].lower()))
                except ValueError as exc:
                    print(f"Cannot change difficulty: {exc}")
                continue
            if command in ("r", "f", "c") and len(line) == 3:
                try:
                    x, y = int(line[1]), int(line[2])
                except ValueError:
                    print("Coordinates must be integers")
                    continue
                if command == "r":
                    game.reveal_cell(x, y)
                elif command == "f":
                    game.toggle_flag(x, y)
                else:
                    game.chord_cell(x, y)
                if game.is_over:
                    print()
                    print_game(game)
                    print("*** WIN! ***" if game.status == GameStatus.WON
                          else "*** LOST (hit mine) ***")
                    print("Type n for a new game or q to quit.")
                continue

            print(PLAY_HELP)
    finally:
        game.close()


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the environment and report results."""
    settings = resolve_settings(Difficulty(args.difficulty), _custom_settings(args))
    env = MinesweeperEnv(settings=settings)
    rng = np.random.default_rng(args.seed)
    num_cells = settings.total_cells

    wins = 0
    total_steps = 0
    for game_index in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game_index)
        done = False
        info = {}

        while not done:
            # Restrict random play to reveals so a game always terminates
            mask = env.get_action_mask()[REVEAL * num_cells:(REVEAL + 1) * num_cells]
            valid_indices = np.where(mask)[0]
            if len(valid_indices) == 0:
                break
            action = REVEAL * num_cells + int(rng.choice(valid_indices))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info.get("steps", 0)
        if info.get("game_state") == "WON":
            wins += 1

    print(f"Played {args.games} games on {settings.rows}x{settings.cols} "
          f"with {settings.mines} mines")
    print(f"  Wins: {wins}")
    print(f"  Losses: {args.games - wins}")
    if args.games:
        print(f"  Win rate: {wins / args.games:.1%}")
        print(f"  Avg steps: {total_steps / args.games:.1f}")


def _add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.BEGINNER.value,
        help="Difficulty preset",
    )
    parser.add_argument("--rows", type=int, default=9, help="Rows for custom")
    parser.add_argument("--cols", type=int, default=9, help="Columns for custom")
    parser.add_argument("--mines", type=int, default=10, help="Mines for custom")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal or simulate games"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    _add_settings_arguments(play_parser)

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report results"
    )
    _add_settings_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
