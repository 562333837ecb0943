from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]

NUM_ROWS = 9
NUM_COLS = 9
NUM_PLAYERS = 2
STARTING_MARBLES = 14

# Convenient tuple aliases used across modules
Position = Tuple[int, int]


class CellState(IntEnum):
    INVALID = -2
    EMPTY = -1
    PLAYER1 = 0
    PLAYER2 = 1

    @staticmethod
    def for_player(player: int) -> "CellState":
        if player == 0:
            return CellState.PLAYER1
        if player == 1:
            return CellState.PLAYER2
        raise ValueError(f"Invalid player id {player}")

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    CellState.INVALID: " ",
    CellState.EMPTY: ".",
    CellState.PLAYER1: "1",
    CellState.PLAYER2: "2",
}


class Direction(IntEnum):
    """Six hex directions in counterclockwise order."""

    RIGHT = 0
    UP_RIGHT = 1
    UP_LEFT = 2
    LEFT = 3
    DOWN_LEFT = 4
    DOWN_RIGHT = 5

    @property
    def offset(self) -> Position:
        return OFFSETS[self]

    @property
    def forward_sister(self) -> "Direction":
        return Direction((int(self) + 1) % len(Direction))

    @property
    def backward_sister(self) -> "Direction":
        return Direction((int(self) + 2) % len(Direction))

    @property
    def opposite(self) -> "Direction":
        return Direction((int(self) + 3) % len(Direction))

    @staticmethod
    def from_offset(d_row: int, d_col: int) -> Optional["Direction"]:
        try:
            return Direction(OFFSETS.index((d_row, d_col)))
        except ValueError:
            return None


# (row, col) unit offsets indexed by Direction
OFFSETS: Tuple[Position, ...] = (
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
    (1, 0),
)


@dataclass(frozen=True)
class Move:
    direction: Direction
    start: Position
    end: Position

    @property
    def is_inline(self) -> bool:
        d_row, d_col = self.direction.offset
        return self.end == (self.start[0] + d_row, self.start[1] + d_col)

    @property
    def is_slide(self) -> bool:
        return not self.is_inline


class Board:
    """9x9 grid of cell states; the hex board occupies 61 of the cells."""

    __slots__ = ("cells",)

    def __init__(self, cells: BoardArray) -> None:
        self.cells = cells

    @classmethod
    def from_layout(cls, layout: Sequence[Sequence[int]]) -> "Board":
        cells = np.array(layout, dtype=np.int8)
        if cells.shape != (NUM_ROWS, NUM_COLS):
            raise ValueError(f"Layout must be {NUM_ROWS}x{NUM_COLS}, got {cells.shape}.")
        return cls(cells)

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < NUM_ROWS and 0 <= col < NUM_COLS

    def get(self, row: int, col: int) -> CellState:
        return CellState(int(self.cells[row, col]))

    def set(self, row: int, col: int, state: CellState) -> None:
        self.cells[row, col] = int(state)

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == int(state)))

    def copy(self) -> "Board":
        return Board(self.cells.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def __repr__(self) -> str:
        return "\n".join("".join(CellState(int(v)).symbol for v in row) for row in self.cells)


@dataclass
class GameState:
    board: Board
    current_player: int = 0
    move_count: int = 0
    outcome: Optional[int] = None  # winning player once decided
    max_moves: int = 200
    marbles_to_win: int = 6
    marble_reward: float = 0.1

    def copy(self) -> "GameState":
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            move_count=self.move_count,
            outcome=self.outcome,
            max_moves=self.max_moves,
            marbles_to_win=self.marbles_to_win,
            marble_reward=self.marble_reward,
        )

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not None or self.move_count >= self.max_moves

    def player_to_move(self) -> Optional[int]:
        return None if self.is_terminal else self.current_player

    def marble_counts(self) -> Tuple[int, int]:
        return self.board.count(CellState.PLAYER1), self.board.count(CellState.PLAYER2)

    def __repr__(self) -> str:
        return (
            f"GameState(current={self.current_player}, outcome={self.outcome}, moves={self.move_count})\n"
            f"{self.board!r}"
        )
