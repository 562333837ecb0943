"""Algebraic move notation.

A cell is written as its row letter (``a`` is the bottom row) followed by
its column digit, e.g. ``b1``. In-line moves are ``<start><end>``
(``c5c6``). Slides add a third cell, the first line end shifted once along
the move direction (``c3c5d3``), which tells the slide direction apart.
"""

from __future__ import annotations

from .rules import decode_action, encode_action
from .state import NUM_COLS, NUM_ROWS, Direction, Move, Position


class NotationError(ValueError):
    pass


def format_position(position: Position) -> str:
    row, col = position
    return f"{chr(ord('a') + (NUM_ROWS - 1 - row))}{chr(ord('1') + col)}"


def parse_position(text: str) -> Position:
    if len(text) != 2:
        raise NotationError(f"Expected a two character cell, got {text!r}")
    row = (NUM_ROWS - 1) - (ord(text[0].lower()) - ord("a"))
    col = ord(text[1]) - ord("1")
    if not (0 <= row < NUM_ROWS and 0 <= col < NUM_COLS):
        raise NotationError(f"Cell {text!r} is off the board")
    return row, col


def format_move(move: Move) -> str:
    text = format_position(move.start) + format_position(move.end)
    if move.is_inline:
        return text
    d_row, d_col = move.direction.offset
    return text + format_position((move.start[0] + d_row, move.start[1] + d_col))


def parse_move(text: str) -> Move:
    text = text.strip().lower()
    if len(text) not in (4, 6):
        raise NotationError(f"Move must have 4 or 6 characters, got {text!r}")
    start = parse_position(text[0:2])
    second = parse_position(text[2:4])

    if len(text) == 4:
        direction = Direction.from_offset(second[0] - start[0], second[1] - start[1])
        if direction is None:
            raise NotationError(f"{text!r} is not a single step")
        return Move(direction, start, second)

    d_row = second[0] - start[0]
    d_col = second[1] - start[1]
    if max(abs(d_row), abs(d_col)) > 2:
        raise NotationError(f"Slide line in {text!r} is longer than three marbles")
    slide = (max(min(d_row, 1), -1), max(min(d_col, 1), -1))

    target = parse_position(text[4:6])
    direction = Direction.from_offset(target[0] - start[0], target[1] - start[1])
    if direction is None:
        raise NotationError(f"Cannot infer a direction from {text!r}")
    if slide in (direction.forward_sister.offset, direction.backward_sister.offset):
        move = Move(direction, start, second)
    else:
        # the line is written from its other end
        move = Move(direction, second, start)
    if decode_action(encode_action(move)) != move:
        raise NotationError(f"{text!r} is not a sideways move")
    return move


def action_to_string(action: int) -> str:
    return format_move(decode_action(action))


def string_to_action(text: str) -> int:
    return encode_action(parse_move(text))
