"""Feature extraction helpers for Abalone."""

from .observation import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    build_aux_vector,
    build_board_tensor,
    state_to_numpy,
    state_to_torch,
)
from .symmetry import (
    Transform,
    all_transforms,
    apply_policy_transform,
    policy_permutation,
    transform_action,
    transform_board,
    transform_board_tensor,
    transform_direction,
    transform_move,
    transform_position,
)

__all__ = [
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "build_board_tensor",
    "build_aux_vector",
    "state_to_numpy",
    "state_to_torch",
    "Transform",
    "all_transforms",
    "apply_policy_transform",
    "policy_permutation",
    "transform_action",
    "transform_board",
    "transform_board_tensor",
    "transform_direction",
    "transform_move",
    "transform_position",
]
