from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]

EMPTY = 0


class OutOfBoundsError(IndexError):
    """Raised when a caller writes to a cell outside the board."""


@dataclass
class PlacementResult:
    lines_cleared: int
    cells_written: int


class GameGrid:
    """Fixed-size board of locked cells.

    The grid uses 0 for empty cells and the variant identifier of the piece
    that locked there for filled cells. Row 0 is the top of the board.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return self.is_inside(x, y) and self.grid[y, x] != EMPTY

    def set_cell(self, x: int, y: int, value: int) -> None:
        if not self.is_inside(x, y):
            raise OutOfBoundsError(f"cell ({x}, {y}) outside {self.width}x{self.height} board")
        self.grid[y, x] = value

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        """Collision rule for absolute piece cells.

        Cells above the top edge only have to respect the side walls.
        """
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != EMPTY:
                return True
        return False

    def lock(self, cells: Iterable[Coordinate], value: int) -> PlacementResult:
        """Write cells with `value`, clear full rows, and return result."""
        written = 0
        for x, y in cells:
            if y < 0:
                continue
            self.set_cell(x, y, value)
            written += 1
        lines = self.clear_full_rows()
        return PlacementResult(lines_cleared=lines, cells_written=written)

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.grid != EMPTY, axis=1))[0]

    def clear_full_rows(self) -> int:
        full_rows = self.full_rows()
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        assert self.grid.shape == (self.height, self.width)
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
