from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Dict, Iterable, List, Tuple

import numpy as np

from abalone.core import (
    ACTION_VECTOR_SIZE,
    LAYOUTS,
    NUM_ROWS,
    Board,
    CellState,
    Direction,
    Move,
    Position,
    decode_action,
    encode_action,
)

CENTRE = NUM_ROWS // 2

_HEX_MASK = np.array(LAYOUTS["empty"], dtype=np.int8) != int(CellState.INVALID)


class Transform(Enum):
    IDENTITY = auto()
    ROT60 = auto()
    ROT120 = auto()
    ROT180 = auto()
    ROT240 = auto()
    ROT300 = auto()
    FLIP = auto()
    FLIP_ROT60 = auto()
    FLIP_ROT120 = auto()
    FLIP_ROT180 = auto()
    FLIP_ROT240 = auto()
    FLIP_ROT300 = auto()


@dataclass(frozen=True)
class SymmetrySpec:
    name: str
    transform: Transform
    rotation: int  # counterclockwise steps of 60 degrees
    reflect: bool  # mirror (r, c) -> (c, r) before rotating


_SPECS: Dict[Transform, SymmetrySpec] = {
    transform: SymmetrySpec(
        transform.name.lower(),
        transform,
        rotation=index % 6,
        reflect=index >= 6,
    )
    for index, transform in enumerate(Transform)
}


def get_spec(transform: Transform) -> SymmetrySpec:
    return _SPECS[transform]


def all_transforms() -> Iterable[Transform]:
    return list(_SPECS.keys())


def _rotate_once(dy: int, dx: int) -> Tuple[int, int]:
    # axial rotation by 60 degrees counterclockwise, e.g. RIGHT -> UP_RIGHT
    return -dx, dy + dx


def transform_position(transform: Transform, row: int, col: int) -> Position:
    spec = get_spec(transform)
    dy, dx = row - CENTRE, col - CENTRE
    if spec.reflect:
        dy, dx = dx, dy
    for _ in range(spec.rotation):
        dy, dx = _rotate_once(dy, dx)
    return dy + CENTRE, dx + CENTRE


def transform_direction(transform: Transform, direction: Direction) -> Direction:
    spec = get_spec(transform)
    index = int(direction)
    if spec.reflect:
        index = 5 - index
    return Direction((index + spec.rotation) % len(Direction))


def transform_move(transform: Transform, move: Move) -> Move:
    start = transform_position(transform, *move.start)
    end = transform_position(transform, *move.end)
    direction = transform_direction(transform, move.direction)
    if get_spec(transform).reflect and move.is_slide:
        # mirroring reverses the sister order, so the line is re-anchored at its other end
        start, end = end, start
    return Move(direction, start, end)


def _on_hex(position: Position) -> bool:
    row, col = position
    return Board.in_bounds(row, col) and bool(_HEX_MASK[row, col])


def transform_action(transform: Transform, action: int) -> int:
    """Map an action id through ``transform``.

    Actions touching cells outside the hexagon can never be legal and are
    returned unchanged.
    """
    move = decode_action(action)
    if not (_on_hex(move.start) and _on_hex(move.end)):
        return action
    return encode_action(transform_move(transform, move))


@lru_cache(maxsize=None)
def _policy_permutation_cached(transform: Transform) -> np.ndarray:
    perm = np.zeros(ACTION_VECTOR_SIZE, dtype=np.int32)
    for idx in range(ACTION_VECTOR_SIZE):
        perm[transform_action(transform, idx)] = idx
    return perm


def policy_permutation(transform: Transform) -> np.ndarray:
    """Return permutation array P such that new_policy = old_policy[P]."""
    return _policy_permutation_cached(transform)


def apply_policy_transform(policy: np.ndarray, transform: Transform) -> np.ndarray:
    perm = policy_permutation(transform)
    return policy[perm]


def _hex_cells() -> List[Position]:
    return [(int(r), int(c)) for r, c in np.argwhere(_HEX_MASK)]


def transform_board(board: Board, transform: Transform) -> Board:
    result = board.copy()
    for row, col in _hex_cells():
        new_row, new_col = transform_position(transform, row, col)
        result.cells[new_row, new_col] = board.cells[row, col]
    return result


def transform_board_tensor(board: np.ndarray, transform: Transform) -> np.ndarray:
    result = board.copy()
    for row, col in _hex_cells():
        new_row, new_col = transform_position(transform, row, col)
        result[:, new_row, new_col] = board[:, row, col]
    return result
