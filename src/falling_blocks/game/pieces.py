from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray
Color = Tuple[int, int, int]


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    assert arr.shape[0] == arr.shape[1], "shapes must be square"
    arr.setflags(write=False)
    return arr


def rotate_cw(shape: Shape) -> Shape:
    # result[c, n-1-r] == shape[r, c]
    return np.rot90(shape, 1, axes=(1, 0))


# Square bounding boxes keep a rotation inside the same extents.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
}

COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}


def shape_for(kind: TetrominoType | str) -> Shape:
    if isinstance(kind, str):
        kind = TetrominoType[kind]
    return BASE_SHAPES[kind]


def all_kinds() -> List[TetrominoType]:
    return list(TetrominoType)


@dataclass(eq=False)
class Piece:
    """A live tetromino: variant, current orientation and top-left anchor."""

    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Piece":
        base = BASE_SHAPES[kind]
        size = base.shape[1]
        return cls(kind=kind, shape=base, x=(board_width - size) // 2, y=0)

    @property
    def size(self) -> int:
        return int(self.shape.shape[0])

    @property
    def color(self) -> Color:
        return COLORS[self.kind]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells
