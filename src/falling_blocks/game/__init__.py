"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board cells, collision rule and line clearing
- Piece: Live tetromino with clockwise rotation
- TetrominoType: Enum of the seven variants
- Spawner: Uniform random piece source with one-piece lookahead
- ScoringRules: Points awarded per cleared row
- FallingBlockGame: Controller state machine and the pure ``step`` function
- GravityDriver: Clock-driven automatic drops
"""

from .grid import GameGrid, OutOfBoundsError, PlacementResult, EMPTY
from .pieces import Piece, TetrominoType, BASE_SHAPES, COLORS, rotate_cw, shape_for, all_kinds
from .spawner import Spawner
from .rules import ScoringRules
from .core import (
    Command,
    Event,
    FallingBlockGame,
    GameConfig,
    GameSnapshot,
    PieceView,
    Tick,
    step,
)
from .clock import Clock, GravityDriver, ManualClock, MonotonicClock

__all__ = [
    "GameGrid",
    "OutOfBoundsError",
    "PlacementResult",
    "EMPTY",
    "Piece",
    "TetrominoType",
    "BASE_SHAPES",
    "COLORS",
    "rotate_cw",
    "shape_for",
    "all_kinds",
    "Spawner",
    "ScoringRules",
    "Command",
    "Event",
    "FallingBlockGame",
    "GameConfig",
    "GameSnapshot",
    "PieceView",
    "Tick",
    "step",
    "Clock",
    "GravityDriver",
    "ManualClock",
    "MonotonicClock",
]
