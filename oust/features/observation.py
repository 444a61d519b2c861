from __future__ import annotations

from typing import Tuple

import numpy as np

from oust.core import GameState, enumerate_legal_moves

BOARD_CHANNELS = 3  # side to move, opponent, legal placements
AUX_VECTOR_SIZE = 2  # current player one-hot


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return planes with shape (3, 2n-1, 2n-1), channel-first, relative to the side to move."""
    size = state.board.shape[0]
    tensor = np.zeros((BOARD_CHANNELS, size, size), dtype=np.float32)
    tensor[0] = state.board == int(state.current_player)
    tensor[1] = state.board == int(state.current_player.opponent)
    for row, col in enumerate_legal_moves(state):
        tensor[2, row, col] = 1.0
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(state.current_player) - 1] = 1.0
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)
