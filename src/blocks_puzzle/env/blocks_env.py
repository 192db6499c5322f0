from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blocks_puzzle.game import ClearResult, GameConfig, Model, Piece, PieceShapes, PieceType

logger = logging.getLogger(__name__)


def _compute_action_mask(model: Model, k: int) -> np.ndarray:
    mask = np.zeros((k, model.height, model.width), dtype=np.bool_)
    for slot in range(min(k, model.hand_size())):
        if model.piece(slot) is None:
            continue
        for row in range(model.height):
            for col in range(model.width):
                mask[slot, row, col] = model.placeable(slot, row, col)
    return mask


class BlocksEnv(gym.Env):
    """Blocks engine as a gymnasium environment.

    Action ``(slot, row, col)`` places ``piece(slot)`` with its top-left
    corner at (row, col), clears full lines and pushes the state on the
    engine's history. A new hand is dealt once every slot is used. The
    episode terminates when no piece left in the hand fits anywhere.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -1.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.model = Model.from_config(self.config)

        h, w = self.config.height, self.config.width
        k = self.config.pieces_per_hand

        # Observation: grid (0/1) and piece types in hand (-1 for used slots)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(PieceType) - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )
        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((k, h, w))

        self._steps = 0
        self._last_clear = ClearResult((), ())

    def _deal_hand(self) -> None:
        self.model.clear_hand()
        for _ in range(self.config.pieces_per_hand):
            self.model.deal(PieceShapes.random_piece(self.np_random))

    def _get_obs(self) -> Dict[str, Any]:
        k = self.config.pieces_per_hand
        pieces = np.full((k,), -1, dtype=np.int8)
        remaining = 0
        for slot in range(min(k, self.model.hand_size())):
            p = self.model.piece(slot)
            if p is None:
                continue
            remaining += 1
            if isinstance(p, Piece) and p.kind is not None:
                pieces[slot] = int(p.kind)
        return {
            "grid": self.model.cells.astype(np.int8),
            "pieces": pieces,
            "pieces_remaining": remaining,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.model, self.config.pieces_per_hand),
            "score": self.model.score,
            "streak_length": self.model.streak_length,
            "rows_cleared": self._last_clear.rows,
            "cols_cleared": self._last_clear.cols,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.model, self.config.pieces_per_hand)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        if seed is None:
            seed = self.config.random_seed
        super().reset(seed=seed)
        self.model = Model.from_config(self.config)
        self._deal_hand()
        self.model.push_state()
        self._steps = 0
        self._last_clear = ClearResult((), ())
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        slot, row, col = map(int, action)
        self._steps += 1
        truncated = self._steps >= self.config.max_episode_steps

        if not self.model.placeable(slot, row, col):
            logger.debug("invalid action slot=%d row=%d col=%d", slot, row, col)
            self._last_clear = ClearResult((), ())
            return self._get_obs(), self.invalid_action_penalty, False, truncated, self._get_info()

        score_before = self.model.score
        self.model.place(slot, row, col)
        self._last_clear = self.model.clear_filled_lines()
        if self.model.hand_used():
            self._deal_hand()
        self.model.push_state()

        reward = float(self.model.score - score_before)
        terminated = self.model.round_over()
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[str | np.ndarray]:
        if self.render_mode == "ansi":
            return str(self.model)
        if self.render_mode == "rgb_array":
            grid = self.model.cells
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
