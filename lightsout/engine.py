"""Puzzle-state engine for the Lights Out game."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Row-major tuple of rows; True means the cell is lit
Grid = tuple[tuple[bool, ...], ...]

DEFAULT_GRID_SIZE = 5
DEFAULT_SCRAMBLE_MOVES = 10


class PreconditionViolation(ValueError):
    """Raised when a cell coordinate is not an integer inside the grid."""


def _check_position(size: int, row: int, col: int) -> None:
    if not (isinstance(row, int) and isinstance(col, int)):
        raise PreconditionViolation(f"Cell ({row!r}, {col!r}) must be given as integers")
    if not (0 <= row < size and 0 <= col < size):
        raise PreconditionViolation(
            f"Cell ({row}, {col}) out of bounds for grid size {size}"
        )


def create_empty_grid(size: int) -> Grid:
    """Create a size x size grid with every light off."""
    return tuple(tuple(False for _ in range(size)) for _ in range(size))


def toggle_at(grid: Grid, row: int, col: int) -> Grid:
    """
    Flip a cell and its orthogonal neighbours.

    Args:
        grid: Current grid (left untouched)
        row: Row of the selected cell, 0-indexed
        col: Column of the selected cell, 0-indexed

    Returns:
        New grid with the cell and its in-bounds neighbours flipped

    Raises:
        PreconditionViolation: If (row, col) is outside the grid
    """
    size = len(grid)
    _check_position(size, row, col)

    new_grid = [list(cells) for cells in grid]
    for r, c in ((row, col), (row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if 0 <= r < size and 0 <= c < size:
            new_grid[r][c] = not new_grid[r][c]

    return tuple(tuple(cells) for cells in new_grid)


def is_solved(grid: Grid) -> bool:
    """Check whether every light is off."""
    return not any(any(cells) for cells in grid)


def count_lit(grid: Grid) -> int:
    """Count the lit cells in a grid."""
    return sum(sum(cells) for cells in grid)


def scramble(
    size: int, num_moves: int, rng: random.Random
) -> tuple[Grid, list[tuple[int, int]]]:
    """
    Build a solvable puzzle by toggling random cells of an empty grid.

    Positions are drawn uniformly with replacement, so repeated picks cancel
    each other. Toggling the returned positions again clears the grid.

    Args:
        size: Grid size (size x size)
        num_moves: Number of random toggles to apply
        rng: Source of randomness

    Returns:
        Tuple of (scrambled grid, positions toggled)
    """
    grid = create_empty_grid(size)
    positions = []

    for _ in range(num_moves):
        row = rng.randrange(size)
        col = rng.randrange(size)
        grid = toggle_at(grid, row, col)
        positions.append((row, col))

    return grid, positions


@dataclass(frozen=True)
class EngineState:
    """Snapshot of the engine after a generate or select call."""

    grid: Grid
    move_count: int
    solved: bool


class PuzzleEngine:
    """Owns the grid and move counter for one Lights Out puzzle at a time."""

    def __init__(
        self,
        grid_size: int = DEFAULT_GRID_SIZE,
        scramble_moves: int = DEFAULT_SCRAMBLE_MOVES,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the engine.

        Args:
            grid_size: Size of the grid (e.g., 5 for 5x5)
            scramble_moves: Number of random toggles used to build a puzzle
            seed: Random seed for reproducible puzzles (ignored if rng is given)
            rng: Random generator to draw scramble positions from
        """
        if grid_size < 1:
            raise ValueError(f"Grid size must be at least 1. Got: {grid_size}")
        if scramble_moves < 0:
            raise ValueError(f"Scramble moves cannot be negative. Got: {scramble_moves}")

        self._grid_size = grid_size
        self.scramble_moves = scramble_moves
        self._rng = rng if rng is not None else random.Random(seed)

        self._grid: Optional[Grid] = None
        self._move_count = 0
        self._solved = False
        self._scramble_sequence: list[tuple[int, int]] = []

    def generate(self) -> EngineState:
        """Start a new puzzle, discarding the current one."""
        self._grid, self._scramble_sequence = scramble(
            self.grid_size, self.scramble_moves, self._rng
        )
        self._move_count = 0
        self._solved = False

        logger.debug(
            f"Generated {self.grid_size}x{self.grid_size} puzzle with "
            f"{count_lit(self._grid)} lit cells from {self._scramble_sequence}"
        )
        return self.state

    def handle_select(self, row: int, col: int) -> EngineState:
        """
        Toggle the selected cell unless the puzzle is already solved.

        Args:
            row: Row of the selected cell, 0-indexed
            col: Column of the selected cell, 0-indexed

        Returns:
            Updated state, or the unchanged state if the puzzle was solved

        Raises:
            PreconditionViolation: If (row, col) is outside the grid
            RuntimeError: If no puzzle has been generated yet
        """
        if self._grid is None:
            raise RuntimeError("No puzzle generated yet; call generate() first")

        _check_position(self.grid_size, row, col)
        if self._solved:
            return self.state

        self._grid = toggle_at(self._grid, row, col)
        self._move_count += 1
        self._solved = is_solved(self._grid) and self._move_count > 0

        if self._solved:
            logger.info(f"Puzzle solved in {self._move_count} moves")

        return self.state

    def is_solved(self, grid: Optional[Grid] = None) -> bool:
        """Check a grid, or the current grid when none is given, for all lights off."""
        if grid is None:
            if self._grid is None:
                return False
            grid = self._grid
        return is_solved(grid)

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def solved(self) -> bool:
        return self._solved

    @property
    def scramble_sequence(self) -> list[tuple[int, int]]:
        """Positions toggled to build the current puzzle."""
        return list(self._scramble_sequence)

    @property
    def state(self) -> EngineState:
        return EngineState(grid=self._grid, move_count=self._move_count, solved=self._solved)
