from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block_rl.game import GameConfig, GameEngine, Move, RandomPieceSource, TetrominoType, rgb255


# Discrete actions: the four piece moves plus a no-op. Pausing is not exposed.
ACTION_TO_MOVE: Dict[int, Optional[Move]] = {
    0: Move.LEFT,
    1: Move.RIGHT,
    2: Move.DOWN,
    3: Move.ROTATE,
    4: None,
}


def _board_features(engine: GameEngine) -> Dict[str, int]:
    grid = engine.state.grid
    return {"holes": grid.count_holes(), "max_height": grid.get_max_height()}


class FallingBlockEnv(gym.Env):
    """Headless driver: every step applies one player move, then one gravity tick."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 max_episode_steps: int = 5000,
                 terminal_penalty: float = -10.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.piece_source = RandomPieceSource(self.config.random_seed)
        self.engine = GameEngine(self.config, piece_source=self.piece_source)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "lines": 1.0,      # reward per line cleared
            "lines_sq": 0.5,   # extra for multiple lines (quadratic)
            "holes": 0.1,      # penalize holes created
            "height": 0.02,    # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.config.height, self.config.width
        n_types = len(TetrominoType)
        # Board: 0 empty, 1..7 locked type, -1..-7 falling piece
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_types, high=n_types, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n_types),
            }
        )
        self.action_space = spaces.Discrete(len(ACTION_TO_MOVE))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.engine.get_state().astype(np.int8),
            "next": int(self.engine.get_next_type()),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.get_score(),
            "level": self.engine.get_level(),
            "fall_interval_ms": self.engine.get_fall_interval(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.piece_source.seed(seed)
        self.engine.new_game()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        move = ACTION_TO_MOVE[int(action)]
        before = _board_features(self.engine)

        if move is not None:
            self.engine.command(move)
        result = self.engine.tick()
        self._steps += 1

        reward_components: Dict[str, float] = {}
        lines = result.lines_cleared
        reward_components["lines"] = self.reward_weights["lines"] * float(lines)
        reward_components["lines_sq"] = self.reward_weights["lines_sq"] * float(lines * lines)
        if result.locked:
            after = _board_features(self.engine)
            reward_components["holes"] = -self.reward_weights["holes"] * float(
                max(0, after["holes"] - before["holes"]))
            reward_components["height"] = -self.reward_weights["height"] * float(
                max(0, after["max_height"] - before["max_height"]))

        terminated = self.engine.is_game_over()
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        info["lines_cleared"] = lines
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.engine.get_state()
        cell = 12
        h, w = board.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                color = rgb255(TetrominoType(abs(v) - 1)) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
