"""Lights Out - a single-player toggle puzzle with a reproducible puzzle engine."""

from .engine import (
    EngineState,
    PreconditionViolation,
    PuzzleEngine,
    count_lit,
    create_empty_grid,
    is_solved,
    scramble,
    toggle_at,
)
from .renderer import BoardRenderer
from .game import LightsOutGame, GameConfig
from .metrics import GameResult, MoveResult

__version__ = "0.1.0"

__all__ = [
    "PuzzleEngine",
    "EngineState",
    "PreconditionViolation",
    "create_empty_grid",
    "toggle_at",
    "is_solved",
    "count_lit",
    "scramble",
    "BoardRenderer",
    "LightsOutGame",
    "GameConfig",
    "GameResult",
    "MoveResult",
]
