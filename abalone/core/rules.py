from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .layouts import board_from_layout
from .state import (
    NUM_COLS,
    NUM_ROWS,
    OFFSETS,
    STARTING_MARBLES,
    Board,
    CellState,
    Direction,
    GameState,
    Move,
    Position,
)

logger = logging.getLogger(__name__)

NUM_DIRECTIONS = len(Direction)
MOVE_SUBTYPES = 5  # in-line step, slide x2 forward/backward, slide x3 forward/backward
ACTION_VECTOR_SIZE = NUM_ROWS * NUM_COLS * NUM_DIRECTIONS * MOVE_SUBTYPES
LINE_WINDOW = 6  # cells inspected for an in-line push, mover included
MAX_LINE = 3

WIN_RETURNS = (1.0, -1.0)
LOSS_RETURNS = (-1.0, 1.0)


@dataclass(frozen=True)
class ActionVector:
    origin: Position
    direction: Direction
    subtype: int

    def to_move(self) -> Move:
        row, col = self.origin
        if self.subtype == 0:
            d_row, d_col = self.direction.offset
            return Move(self.direction, self.origin, (row + d_row, col + d_col))
        sister = self.direction.forward_sister if self.subtype in (1, 3) else self.direction.backward_sister
        scale = 1 if self.subtype in (1, 2) else 2
        s_row, s_col = sister.offset
        return Move(self.direction, self.origin, (row + scale * s_row, col + scale * s_col))

    @staticmethod
    def from_move(move: Move) -> "ActionVector":
        return ActionVector(move.start, move.direction, _slide_subtype(move))

    def to_index(self) -> int:
        base = self.origin[0] * NUM_COLS + self.origin[1]
        base = base * NUM_DIRECTIONS + int(self.direction)
        return base * MOVE_SUBTYPES + self.subtype

    @staticmethod
    def from_index(index: int) -> "ActionVector":
        if not 0 <= index < ACTION_VECTOR_SIZE:
            raise ValueError(f"Action index {index} out of range.")
        subtype = index % MOVE_SUBTYPES
        index //= MOVE_SUBTYPES
        direction = Direction(index % NUM_DIRECTIONS)
        index //= NUM_DIRECTIONS
        return ActionVector((index // NUM_COLS, index % NUM_COLS), direction, subtype)


def _slide_subtype(move: Move) -> int:
    if move.is_inline:
        return 0
    d_row = move.end[0] - move.start[0]
    d_col = move.end[1] - move.start[1]
    forward = move.direction.forward_sister.offset
    backward = move.direction.backward_sister.offset
    candidates = (
        (1, forward, 1),
        (2, backward, 1),
        (3, forward, 2),
        (4, backward, 2),
    )
    for subtype, (s_row, s_col), scale in candidates:
        if (d_row, d_col) == (scale * s_row, scale * s_col):
            return subtype
    # not a slide the codec can express; falls back to the in-line subtype
    return 0


def encode_action(move: Move) -> int:
    return ActionVector.from_move(move).to_index()


def decode_action(index: int) -> Move:
    return ActionVector.from_index(index).to_move()


def initialize_game_state(
    layout: str = "classic",
    *,
    max_moves: int = 200,
    marbles_to_win: int = 6,
    marble_reward: float = 0.1,
) -> GameState:
    return GameState(
        board=board_from_layout(layout),
        current_player=0,
        move_count=0,
        outcome=None,
        max_moves=max_moves,
        marbles_to_win=marbles_to_win,
        marble_reward=marble_reward,
    )


# ----------------------------------------------------------------------
# Validation
# ----------------------------------------------------------------------
def is_valid_move(move: Move, state: GameState) -> bool:
    if not (Board.in_bounds(*move.start) and Board.in_bounds(*move.end)):
        return False
    player = CellState.for_player(state.current_player)
    if state.board.get(*move.start) != player:
        return False
    if move.is_inline:
        return _is_valid_inline(state.board, move, player)
    return _is_valid_slide(state.board, move, player)


def _is_valid_inline(board: Board, move: Move, player: CellState) -> bool:
    line = _read_line(board, move.start, move.direction)
    opponent = CellState.PLAYER2 if player == CellState.PLAYER1 else CellState.PLAYER1
    empty = CellState.EMPTY
    beyond = (CellState.INVALID, CellState.EMPTY)

    if line[1] == empty:
        return True
    if line[1] != player:
        return False
    if line[2] == empty:
        return True
    if line[2] == opponent:
        return line[3] in beyond  # 2 vs 1
    if line[2] != player:
        return False
    if line[3] == empty:
        return True
    if line[3] != opponent:
        return False
    if line[4] in beyond:
        return True  # 3 vs 1
    return line[4] == opponent and line[5] in beyond  # 3 vs 2


def _read_line(board: Board, start: Position, direction: Direction) -> List[CellState]:
    d_row, d_col = direction.offset
    row, col = start
    line: List[CellState] = []
    for _ in range(LINE_WINDOW):
        line.append(board.get(row, col) if Board.in_bounds(row, col) else CellState.INVALID)
        row += d_row
        col += d_col
    return line


def _line_step(move: Move) -> Tuple[int, int, int]:
    """Return the unit step along a slide line and the number of cells in it."""
    d_row = move.end[0] - move.start[0]
    d_col = move.end[1] - move.start[1]
    step_row = max(min(d_row, 1), -1)
    step_col = max(min(d_col, 1), -1)
    size = max(abs(d_row), abs(d_col)) + 1
    return step_row, step_col, size


def _is_valid_slide(board: Board, move: Move, player: CellState) -> bool:
    if abs(move.end[0] - move.start[0]) + 1 > MAX_LINE:
        return False
    if abs(move.end[1] - move.start[1]) + 1 > MAX_LINE:
        return False
    step_row, step_col, size = _line_step(move)
    if (step_row, step_col) not in OFFSETS:
        return False

    d_row, d_col = move.direction.offset
    row, col = move.start
    for _ in range(size):
        if board.get(row, col) != player:
            return False
        dest_row, dest_col = row + d_row, col + d_col
        if not Board.in_bounds(dest_row, dest_col):
            return False
        if board.get(dest_row, dest_col) != CellState.EMPTY:
            return False
        row += step_row
        col += step_col
    return True


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------
def apply_move(move: Move, board: Board) -> None:
    """Mutate ``board`` for a move that already passed :func:`is_valid_move`."""
    if move.is_inline:
        _apply_inline(board, move)
    else:
        _apply_slide(board, move)


def _apply_slide(board: Board, move: Move) -> None:
    step_row, step_col, size = _line_step(move)
    d_row, d_col = move.direction.offset
    row, col = move.start
    player = board.get(row, col)
    for _ in range(size):
        if not Board.in_bounds(row, col) or board.get(row, col) != player:
            break
        dest_row, dest_col = row + d_row, col + d_col
        if not Board.in_bounds(dest_row, dest_col) or board.get(dest_row, dest_col) != CellState.EMPTY:
            break
        board.set(dest_row, dest_col, player)
        board.set(row, col, CellState.EMPTY)
        row += step_row
        col += step_col


def _apply_inline(board: Board, move: Move) -> None:
    d_row, d_col = move.direction.offset
    row, col = move.start
    carried = CellState.EMPTY
    while Board.in_bounds(row, col):
        current = board.get(row, col)
        if current == CellState.INVALID:
            break  # anything carried past the edge is pushed off
        board.set(row, col, carried)
        if current == CellState.EMPTY:
            break
        carried = current
        row += d_row
        col += d_col


# ----------------------------------------------------------------------
# Game flow
# ----------------------------------------------------------------------
def apply_action(state: GameState, action: int, *, in_place: bool = False) -> GameState:
    source_state = state if in_place else state.copy()
    if source_state.is_terminal:
        raise ValueError("Cannot apply action to a terminal state.")

    move = decode_action(action)
    mover = source_state.current_player
    if is_valid_move(move, source_state):
        apply_move(move, source_state.board)
        returns = compute_returns(source_state)
        if returns[mover] == WIN_RETURNS[0]:
            source_state.outcome = mover
            logger.debug("Player %d wins by marble count at move %d", mover, source_state.move_count)
    else:
        source_state.outcome = 1 - mover
        logger.debug("Player %d forfeits with illegal action %d", mover, action)

    source_state.current_player = 1 - mover
    source_state.move_count += 1
    return source_state


def enumerate_legal_actions(state: GameState) -> List[int]:
    if state.is_terminal:
        return []
    return [index for index in range(ACTION_VECTOR_SIZE) if is_valid_move(decode_action(index), state)]


def legal_action_mask(state: GameState) -> np.ndarray:
    mask = np.zeros(ACTION_VECTOR_SIZE, dtype=np.int8)
    legal = enumerate_legal_actions(state)
    if legal:
        mask[legal] = 1
    return mask


def compute_returns(state: GameState) -> Tuple[float, float]:
    if state.outcome is not None:
        return WIN_RETURNS if state.outcome == 0 else LOSS_RETURNS

    count_p1, count_p2 = state.marble_counts()
    threshold = STARTING_MARBLES - state.marbles_to_win
    if count_p1 <= threshold:
        return LOSS_RETURNS
    if count_p2 <= threshold:
        return WIN_RETURNS
    balance = (STARTING_MARBLES - count_p2) - (STARTING_MARBLES - count_p1)
    return balance * state.marble_reward, -balance * state.marble_reward
