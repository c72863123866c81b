from __future__ import annotations

import random
from typing import Optional

from .pieces import TetrominoType, all_kinds


class Spawner:
    """Uniform random piece source with one piece of lookahead.

    Every draw is independent, so the same variant can come up twice in a
    row. Pass a seeded ``random.Random`` for a reproducible sequence.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self._kinds = all_kinds()
        self._lookahead: Optional[TetrominoType] = None

    def _draw(self) -> TetrominoType:
        return self.rng.choice(self._kinds)

    def peek(self) -> TetrominoType:
        if self._lookahead is None:
            self._lookahead = self._draw()
        return self._lookahead

    def next(self) -> TetrominoType:
        kind = self.peek()
        self._lookahead = self._draw()
        return kind

    def clear(self) -> None:
        self._lookahead = None
