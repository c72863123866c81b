from __future__ import annotations

import time
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from .core import FallingBlockGame


class Clock(Protocol):
    def now_ms(self) -> float:
        ...


class MonotonicClock:
    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock driven by hand, for tests and replays."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> None:
        self._now += ms


class GravityDriver:
    """Feeds automatic drops into a game from a clock.

    The reference time only moves when a drop actually fires, so the
    elapsed value handed to ``tick`` keeps growing until it exceeds the
    game's drop interval.
    """

    def __init__(self, game: FallingBlockGame, clock: Optional[Clock] = None) -> None:
        self.game = game
        self.clock: Clock = clock or MonotonicClock()
        self.last_drop_ms = self.clock.now_ms()

    def elapsed_ms(self) -> float:
        return self.clock.now_ms() - self.last_drop_ms

    def poll(self) -> bool:
        now = self.clock.now_ms()
        fired = self.game.tick(now - self.last_drop_ms)
        if fired:
            self.last_drop_ms = now
        return fired
