from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

import numpy as np

from .grid import GameGrid
from .pieces import Piece, Shape, TetrominoType, shape_for
from .rules import ScoringRules
from .spawner import Spawner

logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3


@dataclass(frozen=True)
class Tick:
    """Gravity event carrying the time since the last automatic drop."""

    elapsed_ms: float


Event = Union[Command, Tick]


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    drop_interval_ms: float = 1000.0
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board must be at least 1x1, got {self.width}x{self.height}")
        if self.drop_interval_ms <= 0:
            raise ValueError(f"drop_interval_ms must be positive, got {self.drop_interval_ms}")


@dataclass(frozen=True)
class PieceView:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of everything a presenter needs to draw a frame."""

    board: np.ndarray
    current: Optional[PieceView]
    next_kind: TetrominoType
    next_shape: Shape
    score: int
    lines_cleared_total: int
    game_over: bool


class FallingBlockGame:
    """Board, live piece and spawner driven one event at a time.

    Every mutation is tentative: the candidate piece is checked against the
    board and only kept when it does not collide. A soft drop that collides
    locks the piece instead, clears full rows and spawns the lookahead.
    Once ``game_over`` is set nothing changes any more.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.spawner = Spawner(self.rng)
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.spawner.clear()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self._spawn_piece()

    @property
    def drop_interval_ms(self) -> float:
        return self.config.drop_interval_ms

    @property
    def next_kind(self) -> TetrominoType:
        return self.spawner.peek()

    @property
    def next_shape(self) -> Shape:
        return shape_for(self.next_kind)

    def collides(self, piece: Piece) -> bool:
        return self.grid.collides(piece.cells())

    def _spawn_piece(self) -> None:
        kind = self.spawner.next()
        self.current_piece = Piece.spawn(kind, self.grid.width)
        # Spawner already drew a fresh lookahead; a blocked spawn ends the game
        if self.collides(self.current_piece):
            self.game_over = True
            logger.info(
                "game over: %s blocked at spawn, score=%d lines=%d",
                kind.name, self.score, self.lines_cleared_total,
            )

    def _try(self, candidate: Piece) -> bool:
        if self.collides(candidate):
            return False
        self.current_piece = candidate
        return True

    def move(self, dx: int) -> bool:
        if self.game_over or self.current_piece is None:
            return False
        return self._try(self.current_piece.moved(dx, 0))

    def move_left(self) -> bool:
        return self.move(-1)

    def move_right(self) -> bool:
        return self.move(1)

    def rotate(self) -> bool:
        if self.game_over or self.current_piece is None:
            return False
        return self._try(self.current_piece.rotated())

    def soft_drop(self) -> bool:
        """Lower the piece by one row, locking it when it cannot fall.

        Returns True when the piece moved, False when it locked or the game
        is already over.
        """
        if self.game_over or self.current_piece is None:
            return False
        if self._try(self.current_piece.moved(0, 1)):
            return True
        self._lock_piece()
        self._spawn_piece()
        return False

    def tick(self, elapsed_ms: float) -> bool:
        """Apply gravity if more than one drop interval has elapsed.

        Returns whether a drop fired, so the caller can reset its timer.
        """
        if self.game_over or elapsed_ms <= self.config.drop_interval_ms:
            return False
        self.soft_drop()
        return True

    def _lock_piece(self) -> int:
        assert self.current_piece is not None
        piece = self.current_piece
        result = self.grid.lock(piece.cells(), int(piece.kind))
        lines = result.lines_cleared
        self.lines_cleared_total += lines
        self.pieces_locked += 1
        self.score += self.rules.score_for_lines(lines)
        self.current_piece = None
        logger.debug(
            "locked %s at (%d, %d), cleared %d line(s), score=%d",
            piece.kind.name, piece.x, piece.y, lines, self.score,
        )
        return lines

    def apply(self, event: Event) -> None:
        if isinstance(event, Tick):
            self.tick(event.elapsed_ms)
        elif event == Command.MOVE_LEFT:
            self.move_left()
        elif event == Command.MOVE_RIGHT:
            self.move_right()
        elif event == Command.ROTATE:
            self.rotate()
        elif event == Command.SOFT_DROP:
            self.soft_drop()
        else:
            raise TypeError(f"unsupported event: {event!r}")

    def clone(self) -> "FallingBlockGame":
        return copy.deepcopy(self)

    def snapshot(self) -> GameSnapshot:
        current = None
        if self.current_piece is not None:
            p = self.current_piece
            current = PieceView(kind=p.kind, shape=p.shape, x=p.x, y=p.y)
        return GameSnapshot(
            board=self.grid.clone_state(),
            current=current,
            next_kind=self.next_kind,
            next_shape=self.next_shape,
            score=self.score,
            lines_cleared_total=self.lines_cleared_total,
            game_over=self.game_over,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state


def step(game: FallingBlockGame, event: Event) -> FallingBlockGame:
    """Return a copy of ``game`` with ``event`` applied; ``game`` is untouched."""
    nxt = game.clone()
    nxt.apply(event)
    return nxt
