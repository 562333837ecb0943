from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import torch

from abalone.core import NUM_COLS, NUM_PLAYERS, NUM_ROWS, CellState, GameState

BOARD_CHANNELS = 4  # invalid, empty, player 1, player 2
AUX_VECTOR_SIZE = NUM_PLAYERS  # current player one-hot

_CHANNEL_FOR_STATE = {
    int(CellState.INVALID): 0,
    int(CellState.EMPTY): 1,
    int(CellState.PLAYER1): 2,
    int(CellState.PLAYER2): 3,
}


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return one-hot board tensor with shape (4, 9, 9) channel-first."""
    tensor = np.zeros((BOARD_CHANNELS, NUM_ROWS, NUM_COLS), dtype=np.float32)
    for (row, col), value in np.ndenumerate(state.board.cells):
        channel = _CHANNEL_FOR_STATE.get(int(value))
        if channel is None:
            raise ValueError(f"Unknown cell state {value} at ({row}, {col})")
        tensor[channel, row, col] = 1.0
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[state.current_player] = 1.0
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)


def state_to_torch(
    state: GameState,
    *,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.float32,
) -> Tuple[torch.Tensor, torch.Tensor]:
    board_np, aux_np = state_to_numpy(state)
    board = torch.from_numpy(board_np).to(device=device, dtype=dtype)
    aux = torch.from_numpy(aux_np).to(device=device, dtype=dtype)
    return board, aux
