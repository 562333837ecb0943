"""Named starting layouts.

Rows are listed top to bottom (row letter ``i`` first). ``X`` marks grid
cells outside the hexagon.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from .state import NUM_COLS, NUM_ROWS, Board, CellState

_CHARS = {
    "X": CellState.INVALID,
    ".": CellState.EMPTY,
    "1": CellState.PLAYER1,
    "2": CellState.PLAYER2,
}


def _parse(rows: Sequence[str]) -> List[List[int]]:
    grid = [[int(_CHARS[ch]) for ch in row.split()] for row in rows]
    if len(grid) != NUM_ROWS or any(len(row) != NUM_COLS for row in grid):
        raise ValueError(f"Layout must be {NUM_ROWS}x{NUM_COLS}")
    return grid


EMPTY = _parse(
    [
        "X X X X . . . . .",  # i
        "X X X . . . . . .",  # h
        "X X . . . . . . .",  # g
        "X . . . . . . . .",  # f
        ". . . . . . . . .",  # e
        ". . . . . . . . X",  # d
        ". . . . . . . X X",  # c
        ". . . . . . X X X",  # b
        ". . . . . X X X X",  # a
    ]
)

CLASSIC = _parse(
    [
        "X X X X 2 2 2 2 2",
        "X X X 2 2 2 2 2 2",
        "X X . . 2 2 2 . .",
        "X . . . . . . . .",
        ". . . . . . . . .",
        ". . . . . . . . X",
        ". . 1 1 1 . . X X",
        "1 1 1 1 1 1 X X X",
        "1 1 1 1 1 X X X X",
    ]
)

# https://abaloneonline.wordpress.com/variations/the-classics/
BELGIAN_DAISY = _parse(
    [
        "X X X X 2 2 . 1 1",
        "X X X 2 2 2 1 1 1",
        "X X . 2 2 . 1 1 .",
        "X . . . . . . . .",
        ". . . . . . . . .",
        ". . . . . . . . X",
        ". 1 1 . 2 2 . X X",
        "1 1 1 2 2 2 X X X",
        "1 1 . 2 2 X X X X",
    ]
)

LAYOUTS: Dict[str, List[List[int]]] = {
    "classic": CLASSIC,
    "belgian_daisy": BELGIAN_DAISY,
    "empty": EMPTY,
}


def board_from_layout(name: str) -> Board:
    if name not in LAYOUTS:
        raise KeyError(f"Unknown layout '{name}'. Available: {sorted(LAYOUTS)}")
    return Board.from_layout(LAYOUTS[name])
