from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Event, GameConfig, GameEngine, GameState, Signal, TETROMINOES


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    SOFT_DROP = 4
    HARD_DROP = 5


ACTION_TO_EVENT: Dict[Action, Event] = {
    Action.LEFT: Event.MOVE_LEFT,
    Action.RIGHT: Event.MOVE_RIGHT,
    Action.ROTATE: Event.ROTATE,
    Action.SOFT_DROP: Event.SOFT_DROP,
    Action.HARD_DROP: Event.HARD_DROP,
}

PALETTE: Dict[str, Tuple[int, int, int]] = {
    "cyan": (0, 240, 240),
    "yellow": (240, 240, 0),
    "purple": (160, 0, 240),
    "green": (0, 240, 0),
    "red": (240, 0, 0),
    "blue": (0, 0, 240),
    "orange": (240, 160, 0),
}


def board_codes(state: GameState) -> np.ndarray:
    """Board as int8 piece codes: 0 for empty, TetrominoType value otherwise."""
    cells = state.board.cells
    codes = np.zeros(cells.shape, dtype=np.int8)
    for definition in TETROMINOES:
        codes[cells == definition.colour] = int(definition.kind)
    return codes


class FallingBlocksEnv(gym.Env):
    """Single-player environment: every step applies one action then one gravity tick."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.engine = GameEngine(self.config)
        self.render_mode = render_mode

        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,   # reward per engine point
            "lines": 1.0,    # reward per line cleared
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        rows, cols = self.config.rows, self.config.cols
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=len(TETROMINOES), shape=(rows, cols), dtype=np.int8),
                "next_piece": spaces.Discrete(len(TETROMINOES)),
                "level": spaces.Discrete(1000),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

    def _get_obs(self) -> Dict[str, Any]:
        state = self.engine.state
        return {
            "board": board_codes(state),
            "next_piece": int(state.next_piece.kind) - 1,
            "level": min(state.level, 999),
        }

    def _get_info(self, signals: List[Signal]) -> Dict[str, Any]:
        state = self.engine.state
        return {
            "score": state.score,
            "level": state.level,
            "lines": state.lines,
            "gravity_interval": state.gravity_interval,
            "signals": [s.value for s in signals],
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.engine.reset(seed)
        return self._get_obs(), self._get_info([])

    def step(self, action: int):
        before = self.engine.state
        signals: List[Signal] = []
        event = ACTION_TO_EVENT.get(Action(int(action)))
        if event is not None:
            signals.extend(self.engine.step(event).signals)
        if not self.engine.game_over:
            signals.extend(self.engine.step(Event.GRAVITY_TICK).signals)
        after = self.engine.state

        terminated = bool(after.game_over)
        reward = self.reward_weights["score"] * float(after.score - before.score)
        reward += self.reward_weights["lines"] * float(after.lines - before.lines)
        if terminated:
            reward += self.terminal_penalty
        return self._get_obs(), reward, terminated, False, self._get_info(signals)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cells = self.engine.state.board.cells
        cell = 12
        h, w = cells.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                color = PALETTE.get(str(cells[y, x]), (30, 30, 36))
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
