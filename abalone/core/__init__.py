"""Core game logic for Abalone."""

from .state import (
    NUM_COLS,
    NUM_PLAYERS,
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
from .layouts import LAYOUTS, board_from_layout
from .rules import (
    ACTION_VECTOR_SIZE,
    MOVE_SUBTYPES,
    ActionVector,
    apply_action,
    apply_move,
    compute_returns,
    decode_action,
    encode_action,
    enumerate_legal_actions,
    initialize_game_state,
    is_valid_move,
    legal_action_mask,
)
from .notation import (
    NotationError,
    action_to_string,
    format_move,
    format_position,
    parse_move,
    parse_position,
    string_to_action,
)

__all__ = [
    "Board",
    "CellState",
    "Direction",
    "GameState",
    "Move",
    "Position",
    "ActionVector",
    "ACTION_VECTOR_SIZE",
    "MOVE_SUBTYPES",
    "NUM_COLS",
    "NUM_PLAYERS",
    "NUM_ROWS",
    "OFFSETS",
    "STARTING_MARBLES",
    "LAYOUTS",
    "board_from_layout",
    "apply_action",
    "apply_move",
    "compute_returns",
    "decode_action",
    "encode_action",
    "enumerate_legal_actions",
    "initialize_game_state",
    "is_valid_move",
    "legal_action_mask",
    "NotationError",
    "action_to_string",
    "format_move",
    "format_position",
    "parse_move",
    "parse_position",
    "string_to_action",
]
