from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import BlockBlastGame, GameConfig, Piece, PieceColor, PieceKind
from block_blast.visualization.palette import rgb_for_value


logger = logging.getLogger(__name__)


def compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    """Boolean mask over flattened (row, col) offsets for the current piece."""
    size = game.grid.size
    mask = np.zeros((size * size,), dtype=np.bool_)
    if not game.has_moves:
        return mask
    for row, col in game.valid_placements():
        mask[row * size + col] = True
    return mask


def _encode_piece(piece: Piece) -> np.ndarray:
    return np.array([int(piece.kind), int(piece.color)], dtype=np.int8)


class BlockBlastEnv(gym.Env):
    """One engine game per episode; an action places the current piece.

    Action `a` targets row `a // size`, column `a % size`.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        invalid_action_penalty: float = -1.0,
        max_episode_steps: int = 1000,
    ) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode: {render_mode!r}")
        self.game = BlockBlastGame(config)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self._steps = 0

        size = self.game.grid.size
        top_id = max(len(PieceKind), len(PieceColor))
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=len(PieceColor), shape=(size, size), dtype=np.int8),
                "current": spaces.Box(low=0, high=top_id, shape=(2,), dtype=np.int8),
                "next": spaces.Box(low=0, high=top_id, shape=(2,), dtype=np.int8),
                "level": spaces.Discrete(self.game.rules.max_level + 1),
            }
        )
        self.action_space = spaces.Discrete(size * size)

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.grid.clone_state(),
            "current": _encode_piece(self.game.current_piece),
            "next": _encode_piece(self.game.next_piece),
            "level": self.game.level,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines_cleared": self.game.lines_cleared_total,
            "action_mask": compute_action_mask(self.game),
        }

    def action_masks(self) -> np.ndarray:
        return compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game = self.game.reset(seed)
        logger.debug("episode reset (seed=%s)", seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"action {action} outside {self.action_space}")
        size = self.game.grid.size
        row, col = divmod(action, size)

        result = self.game.play(row, col)
        if result.success:
            reward = float(result.score_gained)
        else:
            reward = self.invalid_action_penalty

        self._steps += 1
        # A live game whose current piece fits nowhere can only fail from here
        terminated = not self.game.has_moves
        truncated = not terminated and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["placed"] = result.success
        info["lines_cleared_step"] = result.lines_cleared
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        cell = 12
        grid = self.game.board
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = rgb_for_value(int(grid[y, x]))
        return img

    def close(self) -> None:
        pass
