#!/usr/bin/env python3
"""CLI entry point for the Lights Out puzzle."""

import argparse
import logging
import sys
from typing import Optional, TextIO

from lightsout.game import LightsOutGame, GameConfig

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  row,col  toggle the cell at row,col (1-indexed, e.g. 2,3)
  r        start a new puzzle
  q        quit
  ?        show this help"""


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_grid_size(value: str) -> int:
    """Parse and validate the grid size argument."""
    try:
        size = int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid grid size: {value}. Must be an integer.")
    if size < 2:
        raise argparse.ArgumentTypeError(f"Grid size must be at least 2. Got: {size}")
    return size


def parse_moves(value: str) -> list[str]:
    """Split a scripted move list such as "1,1 2,3;3,3" into coordinates."""
    return [m for m in value.replace(";", " ").split() if m]


def print_board(game: LightsOutGame, out: Optional[TextIO] = None) -> None:
    out = out or sys.stdout
    print(game.get_text(), file=out)
    print(f"Moves: {game.state.move_count}", file=out)


def run_interactive(
    game: LightsOutGame, stdin: Optional[TextIO] = None, out: Optional[TextIO] = None
) -> None:
    """
    Read commands until the player quits or input runs out.

    After a win only the help, new-puzzle and quit commands are accepted.

    Args:
        game: Game to play
        stdin: Where commands are read from
        out: Where the board is printed
    """
    stdin = stdin or sys.stdin
    out = out or sys.stdout

    print(game.renderer.get_coordinate_format_description(), file=out)
    print(HELP_TEXT, file=out)
    print_board(game, out)

    while True:
        print("> ", end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            break

        command = line.strip().lower()
        if not command:
            continue
        if command in ("q", "quit", "exit"):
            break
        if command in ("?", "h", "help"):
            print(HELP_TEXT, file=out)
            continue
        if command in ("r", "reset", "new"):
            game.reset()
            print_board(game, out)
            continue

        if game.is_solved():
            logger.warning("Puzzle solved; enter r for a new puzzle or q to quit")
            continue

        try:
            game.select_coordinate(command)
        except ValueError as e:
            logger.warning(str(e))
            continue

        print_board(game, out)
        if game.is_solved():
            print(f"You won in {game.state.move_count} moves!", file=out)


def main(argv: Optional[list[str]] = None):
    parser = argparse.ArgumentParser(
        description="Lights Out - switch every light off",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play a 5x5 puzzle in the terminal
  python main.py

  # Reproducible 4x4 puzzle built from 6 random toggles
  python main.py --grid-size 4 --scramble-moves 6 --seed 42

  # Replay a fixed list of moves and save images plus a GIF
  python main.py --seed 7 --moves "1,1 3,3 5,2" \\
    --output results/run1/ --save-images --gif
        """,
    )

    # Puzzle settings
    parser.add_argument(
        "--grid-size",
        "-g",
        type=parse_grid_size,
        default=5,
        help="Size of the square grid (default: 5)",
    )
    parser.add_argument(
        "--scramble-moves",
        "-k",
        type=int,
        default=10,
        help="Random toggles used to build the puzzle (default: 10)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducible puzzles"
    )

    # Scripted play
    parser.add_argument(
        "--moves",
        type=parse_moves,
        default=None,
        help='Play these 1-indexed moves instead of reading stdin (e.g., "1,1 2,3")',
    )
    parser.add_argument(
        "--max-moves", type=int, default=None, help="Stop scripted play after this many moves"
    )

    # Output settings
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="Output directory for results"
    )
    parser.add_argument(
        "--save-images", action="store_true", help="Save a board image after every move"
    )
    parser.add_argument(
        "--gif", action="store_true", help="Save an animated GIF showing game evolution"
    )
    parser.add_argument(
        "--gif-duration",
        type=int,
        default=500,
        help="Duration of each frame in the GIF in milliseconds (default: 500)",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress progress output")

    args = parser.parse_args(argv)

    setup_logging(not args.quiet)

    try:
        config = GameConfig(
            grid_size=args.grid_size,
            scramble_moves=args.scramble_moves,
            seed=args.seed,
            max_moves=args.max_moves,
            output_dir=args.output,
            save_intermediate_images=args.save_images,
            save_gif=args.gif,
            gif_frame_duration=args.gif_duration,
            verbose=not args.quiet,
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        game = LightsOutGame(config)

        if args.moves is not None:
            result = game.play(args.moves)
            print_board(game)
        else:
            run_interactive(game)
            result = game.finish()

        print("\n" + "=" * 50)
        print("LIGHTS OUT COMPLETE")
        print("=" * 50)
        print(f"Solved: {'Yes' if result.solved else 'No'}")
        print(f"Moves: {result.total_moves}")
        print(f"Lights on: {result.final_lit}/{result.total_cells}")
        print(f"New puzzles: {result.resets}")
        print(f"Duration: {result.duration_seconds:.1f}s")
        if args.output:
            print(f"Results saved to: {args.output}")
        print("=" * 50)

        sys.exit(0 if result.solved else 1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Game failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
