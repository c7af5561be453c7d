"""Game session controller for Lights Out."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image
import numpy as np

from .engine import (
    DEFAULT_GRID_SIZE,
    DEFAULT_SCRAMBLE_MOVES,
    EngineState,
    PuzzleEngine,
    count_lit,
)
from .metrics import GameResult, MetricsTracker, MoveResult
from .renderer import BoardRenderer

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Configuration for a Lights Out game."""

    grid_size: int = DEFAULT_GRID_SIZE
    scramble_moves: int = DEFAULT_SCRAMBLE_MOVES
    seed: Optional[int] = None

    # Stop scripted play after this many accepted moves (None = no limit)
    max_moves: Optional[int] = None

    # Output settings
    output_dir: Optional[str] = None
    save_intermediate_images: bool = False
    save_gif: bool = False
    gif_frame_duration: int = 500  # milliseconds per frame
    cell_size: int = 64
    verbose: bool = True

    def __post_init__(self):
        if self.grid_size < 1:
            raise ValueError(f"Grid size must be at least 1. Got: {self.grid_size}")
        if self.scramble_moves < 0:
            raise ValueError(f"Scramble moves cannot be negative. Got: {self.scramble_moves}")
        if self.max_moves is not None and self.max_moves < 1:
            raise ValueError(f"Max moves must be positive. Got: {self.max_moves}")
        if self.gif_frame_duration <= 0:
            raise ValueError(
                f"GIF frame duration must be positive. Got: {self.gif_frame_duration}"
            )


def parse_coordinate(coord: str, grid_size: int) -> tuple[int, int]:
    """
    Parse a coordinate string to (row, col) 0-indexed.

    Args:
        coord: Coordinate in "row,col" format (1-indexed)
        grid_size: Size of the grid the coordinate refers to

    Returns:
        Tuple of (row, col) 0-indexed

    Raises:
        ValueError: If coordinate format is invalid or out of bounds
    """
    parts = coord.strip().split(",")
    if len(parts) != 2:
        raise ValueError(f"Invalid coordinate format: '{coord}'. Use 'row,col' (e.g., '2,3')")

    try:
        row = int(parts[0].strip()) - 1
        col = int(parts[1].strip()) - 1
    except ValueError:
        raise ValueError(f"Invalid coordinate '{coord}': row and column must be integers")

    if not (0 <= row < grid_size and 0 <= col < grid_size):
        raise ValueError(f"Coordinate {coord} out of bounds for grid size {grid_size}")

    return row, col


class LightsOutGame:
    """Drives one engine through a game session and records what happens."""

    def __init__(self, config: GameConfig):
        """
        Initialize the game and generate the first puzzle.

        Args:
            config: Game configuration
        """
        self.config = config

        self.engine = PuzzleEngine(
            grid_size=config.grid_size,
            scramble_moves=config.scramble_moves,
            seed=config.seed,
        )
        self.renderer = BoardRenderer(grid_size=config.grid_size, cell_size=config.cell_size)

        state = self.engine.generate()
        self.initial_grid = state.grid
        self.metrics = MetricsTracker(
            grid_size=config.grid_size, initial_lit=count_lit(state.grid)
        )

        self._start_time = datetime.now()
        self._end_time: Optional[datetime] = None
        self._gif_frames: list[Image.Image] = []

        if config.output_dir:
            self.output_dir = Path(config.output_dir)
            self.output_dir.mkdir(parents=True, exist_ok=True)
        else:
            self.output_dir = None

        self._record_initial_state()

    def _record_initial_state(self) -> None:
        image = self.get_current_image()
        if self.config.save_intermediate_images:
            self._save_image(image, "initial_state.png")
        self._capture_gif_frame(image)

    def _save_image(self, image: np.ndarray, name: str) -> None:
        """Save an image to the output directory."""
        if self.output_dir is None:
            return

        Image.fromarray(image).save(self.output_dir / name)

    def _capture_gif_frame(self, image: np.ndarray) -> None:
        """Capture a frame for the GIF animation."""
        if not self.config.save_gif:
            return

        pil_image = Image.fromarray(image)
        # Palette mode keeps the GIF small
        self._gif_frames.append(pil_image.convert("P", palette=Image.Palette.ADAPTIVE, colors=256))

    def _save_gif(self) -> None:
        """Save the captured frames as an animated GIF."""
        if not self.config.save_gif or not self._gif_frames or self.output_dir is None:
            return

        gif_path = self.output_dir / "game_evolution.gif"
        self._gif_frames[0].save(
            gif_path,
            save_all=True,
            append_images=self._gif_frames[1:],
            duration=self.config.gif_frame_duration,
            loop=0,
            optimize=True,
        )

        if self.config.verbose:
            logger.info(f"GIF saved to: {gif_path} ({len(self._gif_frames)} frames)")

    def select(self, row: int, col: int) -> MoveResult:
        """
        Select a cell on the board.

        Args:
            row: Row of the cell, 0-indexed
            col: Column of the cell, 0-indexed

        Returns:
            MoveResult describing the selection; rejected if the board was solved

        Raises:
            PreconditionViolation: If (row, col) is outside the grid
        """
        before = self.engine.state
        lit_before = count_lit(before.grid)

        state = self.engine.handle_select(row, col)
        accepted = state.move_count > before.move_count

        move = MoveResult(
            move_number=state.move_count,
            row=row,
            col=col,
            lit_before=lit_before,
            lit_after=count_lit(state.grid),
            accepted=accepted,
            solved=state.solved,
        )
        self.metrics.record_move(move)

        if not accepted:
            logger.warning(f"Board already solved; ignoring selection {move.coordinate}")
            return move

        image = self.get_current_image()
        if self.config.save_intermediate_images:
            self._save_image(image, f"move_{state.move_count:03d}.png")
        self._capture_gif_frame(image)

        if self.config.verbose:
            logger.info(
                f"Move {state.move_count}: {move.coordinate}, "
                f"{move.lit_after}/{self.engine.grid_size ** 2} lit"
            )
            if state.solved:
                logger.info(f"You won in {state.move_count} moves!")

        return move

    def select_coordinate(self, coord: str) -> MoveResult:
        """Select a cell given as a 1-indexed "row,col" string."""
        row, col = parse_coordinate(coord, self.config.grid_size)
        return self.select(row, col)

    def reset(self) -> EngineState:
        """Replace the current puzzle with a freshly generated one."""
        state = self.engine.generate()
        self.initial_grid = state.grid
        self.metrics.record_reset(count_lit(state.grid))

        if self.config.verbose:
            logger.info(f"New puzzle: {self.metrics.initial_lit} lights on")

        self._record_initial_state()
        return state

    def play(self, moves: Iterable[str]) -> GameResult:
        """
        Apply a scripted sequence of moves, then finish the game.

        Stops early once the board is solved or max_moves is reached.

        Args:
            moves: Coordinates in 1-indexed "row,col" format

        Returns:
            GameResult for the session
        """
        for coord in moves:
            if self.engine.solved:
                break
            if self.config.max_moves is not None and self.engine.move_count >= self.config.max_moves:
                logger.info(f"Reached move limit of {self.config.max_moves}")
                break
            self.select_coordinate(coord)

        return self.finish()

    def finish(self) -> GameResult:
        """
        End the session and write any configured outputs.

        Returns:
            GameResult with complete game metrics
        """
        self._end_time = datetime.now()
        duration = (self._end_time - self._start_time).total_seconds()

        state = self.engine.state
        if self.output_dir:
            self._save_image(self.get_current_image(), "final_state.png")
        self._save_gif()

        result = GameResult(
            grid_size=self.config.grid_size,
            scramble_moves=self.config.scramble_moves,
            seed=self.config.seed,
            solved=state.solved,
            total_moves=state.move_count,
            rejected_moves=self.metrics.rejected_moves,
            resets=self.metrics.resets,
            min_lit_achieved=self.metrics.min_lit,
            initial_lit=self.metrics.initial_lit,
            final_lit=count_lit(state.grid),
            initial_grid=self.initial_grid,
            final_grid=state.grid,
            start_time=self._start_time.isoformat(),
            end_time=self._end_time.isoformat(),
            duration_seconds=duration,
            move_history=list(self.metrics.moves),
        )

        if self.output_dir:
            result.save(self.output_dir / "result.json")

        if self.config.verbose:
            logger.info(f"Game complete. Solved: {result.solved}")
            logger.info(
                f"Moves: {result.total_moves} (puzzle built from {result.scramble_moves}), "
                f"lit: {result.final_lit}/{result.total_cells}"
            )

        return result

    @property
    def state(self) -> EngineState:
        return self.engine.state

    def get_current_image(self) -> np.ndarray:
        """Get the current board as an RGB image."""
        state = self.engine.state
        return self.renderer.render(state.grid, solved=state.solved)

    def get_text(self) -> str:
        """Get the current board as a printable string."""
        return self.renderer.to_text(self.engine.grid)

    def is_solved(self) -> bool:
        """Check if the puzzle is currently solved."""
        return self.engine.solved
