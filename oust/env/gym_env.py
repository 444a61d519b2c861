from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from oust.core import (
    DEFAULT_MAX_PLY,
    DEFAULT_SIDE,
    GameResult,
    GameState,
    PlayerColor,
    apply_move,
    decode_cell,
    encode_cell,
    enumerate_legal_moves,
    hex_grid,
    initialize_game_state,
)
from oust.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, state_to_numpy


class OustEnv(gym.Env):
    """Single-placement environment; a capture leaves the same player to move."""

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        side: int = DEFAULT_SIDE,
        max_ply: int = DEFAULT_MAX_PLY,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._side = side
        self._max_ply = max_ply
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        grid = hex_grid(side)
        board_shape = (BOARD_CHANNELS, grid.size, grid.size)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(grid.action_size)

        self._state = initialize_game_state(side=side, max_ply=max_ply)

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        max_ply = options.get("max_ply", self._max_ply) if options else self._max_ply
        self._state = initialize_game_state(side=self._side, max_ply=max_ply)
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        if self._enforce_legal and not self.legal_action_mask()[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        cell = decode_cell(int(action_index), self._side)
        self._state = apply_move(self._state, cell, in_place=False)

        observation = self._build_observation()
        info = self._build_info()
        reward = self._compute_reward(self._state.result)
        terminated = self._state.result != GameResult.ONGOING
        truncated = False

        return observation, reward, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for cell in enumerate_legal_moves(self._state):
            mask[encode_cell(cell, self._side)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return render_board(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        board, aux = state_to_numpy(self._state)
        return {"board": board, "aux": aux}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "current_player": self._state.current_player,
        }

    def _compute_reward(self, result: GameResult) -> float:
        if result == GameResult.BLACK_WIN:
            return 1.0
        if result == GameResult.WHITE_WIN:
            return -1.0
        return 0.0


def render_board(state: GameState) -> str:
    """Draw the hexagon row by row, indenting rows so neighbours line up."""
    symbols = {0: ".", int(PlayerColor.BLACK): "X", int(PlayerColor.WHITE): "O"}
    grid = hex_grid(state.side)
    rows = []
    for row in range(grid.size):
        cells = [symbols[int(state.board[row, col])] for col in range(grid.size) if grid.mask[row, col]]
        indent = " " * abs(row - (grid.side - 1))
        rows.append(indent + " ".join(cells))
    return "\n".join(rows)
