from __future__ import annotations

import pytest

from falling_blocks.game import FallingBlockGame, GameConfig, Piece, TetrominoType


def force_piece(game: FallingBlockGame, kind: TetrominoType, x: int | None = None, y: int = 0) -> Piece:
    piece = Piece.spawn(kind, game.grid.width)
    if x is not None:
        piece.x = x
    piece.y = y
    game.current_piece = piece
    return piece


def drop_until_locked(game: FallingBlockGame, limit: int = 100) -> int:
    """Soft drop until the current piece locks; returns the successful drops."""
    for moved in range(limit):
        if not game.soft_drop():
            return moved
    raise AssertionError("piece never locked")


@pytest.fixture
def game() -> FallingBlockGame:
    return FallingBlockGame(GameConfig(random_seed=1234))
