from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from abalone.config import GameConfig
from abalone.core import (
    ACTION_VECTOR_SIZE,
    NUM_COLS,
    NUM_ROWS,
    CellState,
    GameState,
    apply_action,
    compute_returns,
    legal_action_mask,
)
from abalone.features import AUX_VECTOR_SIZE, BOARD_CHANNELS, build_aux_vector, build_board_tensor

logger = logging.getLogger(__name__)


class AbaloneEnv(gym.Env):
    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        config: Optional[GameConfig] = None,
        enforce_legal_actions: bool = False,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._config = config or GameConfig()
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, NUM_ROWS, NUM_COLS)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(ACTION_VECTOR_SIZE)

        self._state = self._config.new_game()
        self._last_info: Dict[str, Any] = {}

    @property
    def state(self) -> GameState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        config = self._config
        if options:
            config = config.replace(
                layout=options.get("layout"),
                max_moves=options.get("max_moves"),
                marbles_to_win=options.get("marbles_to_win"),
            )
        self._state = config.new_game()
        observation = self._build_observation()
        info = self._build_info()
        self._last_info = info
        return observation, info

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        if self._enforce_legal and not self.legal_action_mask()[action_index]:
            raise ValueError("Illegal action provided and enforce_legal_actions=True.")

        self._state = apply_action(self._state, int(action_index), in_place=False)

        observation = self._build_observation()
        info = self._build_info()
        self._last_info = info

        terminated = self._state.outcome is not None
        truncated = not terminated and self._state.is_terminal
        reward = float(info["returns"][0]) if (terminated or truncated) else 0.0
        if terminated or truncated:
            logger.debug(
                "Episode finished after %d moves: outcome=%s returns=%s",
                self._state.move_count,
                self._state.outcome,
                info["returns"],
            )
        return observation, reward, terminated, truncated, info

    def legal_action_mask(self) -> np.ndarray:
        return legal_action_mask(self._state)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return render_ascii(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        board = build_board_tensor(self._state)
        aux = build_aux_vector(self._state)
        return {"board": board, "aux": aux}

    def _build_info(self) -> Dict[str, Any]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "current_player": self._state.player_to_move(),
            "returns": compute_returns(self._state),
        }


def render_ascii(state: GameState) -> str:
    """Draw the hexagon with row letters on the left and column digits below.

    A status block (moves, returns, winner, done) follows the board.
    """
    lines = []
    for row in range(NUM_ROWS):
        letter = chr(ord("a") + NUM_ROWS - 1 - row)
        indent = " " * abs(row - NUM_ROWS // 2)
        cells = [
            state.board.get(row, col).symbol
            for col in range(NUM_COLS)
            if state.board.get(row, col) != CellState.INVALID
        ]
        suffix = ""
        if row > NUM_ROWS // 2:
            # diagonal column labels run down the lower right edge
            suffix = f"  {NUM_COLS + NUM_ROWS // 2 + 1 - row}"
        lines.append(f"{letter} {indent}{' '.join(cells)}{suffix}")
    footer = " " * (NUM_ROWS // 2 + 2) + " ".join(str(col + 1) for col in range(NUM_COLS // 2 + 1))
    lines.append(footer)
    first, second = compute_returns(state)
    winner = "-" if state.outcome is None else CellState.for_player(state.outcome).symbol
    lines.append(f"moves: {state.move_count}")
    lines.append(f"returns: {first:.2f} {second:.2f}")
    lines.append(f"winner: {winner}")
    lines.append(f"done: {str(state.is_terminal).lower()}")
    return "\n".join(lines)
