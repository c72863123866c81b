from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    Command,
    FallingBlockGame,
    GameConfig,
    GravityDriver,
    ManualClock,
    TetrominoType,
)

# Discrete action index -> controller command; the last index only lets time pass
ACTIONS: Tuple[Optional[Command], ...] = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    None,
)


class FallingBlocksEnv(gym.Env):
    """Single-player environment over the falling block controller.

    Each step applies one command and then advances a synthetic clock by
    ``frame_ms``, letting gravity drop the piece whenever the configured
    drop interval has passed. The reward is the score gained in the step.
    """

    metadata = {"render_modes": [], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        frame_ms: float = 250.0,
        max_episode_steps: int = 5000,
    ) -> None:
        super().__init__()
        if render_mode is not None:
            raise ValueError("FallingBlocksEnv does not render")
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)

        self.clock = ManualClock()
        self.driver = GravityDriver(self.game, self.clock)

        h, w = self.game.grid.height, self.game.grid.width
        n_kinds = len(TetrominoType)
        # Locked cells hold the variant id; the falling piece is overlaid negated
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "next_kind": int(self.game.next_kind),
            "holes": self.game.grid.count_holes(),
            "max_height": self.game.grid.get_max_height(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self.clock = ManualClock()
        self.driver = GravityDriver(self.game, self.clock)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action!r}")

        score_before = self.game.score
        command = ACTIONS[action]
        if command is not None:
            self.game.apply(command)
        self.clock.advance(self.frame_ms)
        self.driver.poll()

        self._steps += 1
        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def close(self) -> None:
        pass
