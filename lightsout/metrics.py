"""Move accounting and result tracking for Lights Out games."""

from dataclasses import dataclass, field
from typing import Optional
import json
from pathlib import Path

from .engine import Grid


def _grid_to_list(grid: Optional[Grid]) -> Optional[list[list[bool]]]:
    if grid is None:
        return None
    return [list(cells) for cells in grid]


def _grid_from_list(data: Optional[list[list[bool]]]) -> Optional[Grid]:
    if data is None:
        return None
    return tuple(tuple(bool(cell) for cell in cells) for cells in data)


@dataclass
class MoveResult:
    """Result of a single cell selection."""

    move_number: int  # Engine move count after this selection
    row: int  # 0-indexed
    col: int  # 0-indexed
    lit_before: int
    lit_after: int
    accepted: bool = True  # False when the board was already solved
    solved: bool = False

    @property
    def progress(self) -> int:
        """Lights switched off by this move (negative if more came on)."""
        return self.lit_before - self.lit_after

    @property
    def coordinate(self) -> str:
        """1-indexed "row,col" label of the selected cell."""
        return f"{self.row + 1},{self.col + 1}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "move_number": self.move_number,
            "row": self.row,
            "col": self.col,
            "lit_before": self.lit_before,
            "lit_after": self.lit_after,
            "accepted": self.accepted,
            "solved": self.solved,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MoveResult":
        return cls(
            move_number=data["move_number"],
            row=data["row"],
            col=data["col"],
            lit_before=data["lit_before"],
            lit_after=data["lit_after"],
            accepted=data.get("accepted", True),
            solved=data.get("solved", False),
        )


@dataclass
class GameResult:
    """Complete result of a Lights Out game."""

    # Configuration
    grid_size: int
    scramble_moves: int
    seed: Optional[int]

    # Results
    solved: bool
    total_moves: int
    rejected_moves: int
    resets: int
    min_lit_achieved: int
    initial_lit: int
    final_lit: int

    # Boards
    initial_grid: Optional[Grid]
    final_grid: Optional[Grid]

    # Timing
    start_time: str
    end_time: str
    duration_seconds: float

    # History
    move_history: list[MoveResult] = field(default_factory=list)

    @property
    def total_cells(self) -> int:
        return self.grid_size**2

    @property
    def moves_over_scramble(self) -> int:
        """Player moves beyond the number of toggles used to build the puzzle."""
        return self.total_moves - self.scramble_moves

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "config": {
                "grid_size": self.grid_size,
                "scramble_moves": self.scramble_moves,
                "seed": self.seed,
            },
            "results": {
                "solved": self.solved,
                "total_moves": self.total_moves,
                "rejected_moves": self.rejected_moves,
                "resets": self.resets,
                "min_lit_achieved": self.min_lit_achieved,
                "initial_lit": self.initial_lit,
                "final_lit": self.final_lit,
                "moves_over_scramble": self.moves_over_scramble,
            },
            "boards": {
                "initial": _grid_to_list(self.initial_grid),
                "final": _grid_to_list(self.final_grid),
            },
            "timing": {
                "start_time": self.start_time,
                "end_time": self.end_time,
                "duration_seconds": self.duration_seconds,
            },
            "move_history": [m.to_dict() for m in self.move_history],
        }

    def save(self, path: str | Path) -> None:
        """Save result to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> "GameResult":
        """Load from dictionary."""
        config = data["config"]
        results = data["results"]
        boards = data.get("boards", {})
        timing = data["timing"]

        return cls(
            grid_size=config["grid_size"],
            scramble_moves=config["scramble_moves"],
            seed=config.get("seed"),
            solved=results["solved"],
            total_moves=results["total_moves"],
            rejected_moves=results["rejected_moves"],
            resets=results.get("resets", 0),
            min_lit_achieved=results["min_lit_achieved"],
            initial_lit=results["initial_lit"],
            final_lit=results["final_lit"],
            initial_grid=_grid_from_list(boards.get("initial")),
            final_grid=_grid_from_list(boards.get("final")),
            start_time=timing["start_time"],
            end_time=timing["end_time"],
            duration_seconds=timing["duration_seconds"],
            move_history=[MoveResult.from_dict(m) for m in data.get("move_history", [])],
        )

    @classmethod
    def load(cls, path: str | Path) -> "GameResult":
        """Load from JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls.from_dict(data)


class MetricsTracker:
    """
    Tracks metrics for the current puzzle of a game.

    A reset starts the move history over; only the reset count carries across.
    """

    def __init__(self, grid_size: int, initial_lit: int = 0):
        self.grid_size = grid_size
        self.resets = 0
        self._start(initial_lit)

    def _start(self, initial_lit: int) -> None:
        self.moves: list[MoveResult] = []
        self.total_moves = 0
        self.rejected_moves = 0
        self.initial_lit = initial_lit
        self.current_lit = initial_lit
        self.min_lit = initial_lit

    def record_move(self, move: MoveResult) -> None:
        """Record a move result."""
        self.moves.append(move)
        if move.accepted:
            self.total_moves += 1
        else:
            self.rejected_moves += 1
        self.current_lit = move.lit_after
        self.min_lit = min(self.min_lit, move.lit_after)

    def record_reset(self, initial_lit: int) -> None:
        """Record that a fresh puzzle replaced the current one."""
        self.resets += 1
        self._start(initial_lit)

    def get_lit_progression(self) -> list[int]:
        """Get list of lit counts after each move."""
        return [m.lit_after for m in self.moves]

    def get_summary(self) -> dict:
        """Get a summary of current metrics."""
        return {
            "moves": self.total_moves,
            "rejected_moves": self.rejected_moves,
            "resets": self.resets,
            "initial_lit": self.initial_lit,
            "min_lit": self.min_lit,
            "current_lit": self.current_lit,
        }
