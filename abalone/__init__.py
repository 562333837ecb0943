"""Abalone rules engine package."""

from . import core, env, features
from .config import ConfigError, GameConfig, load_game_config
from .env import AbaloneEnv
from .features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    Transform,
    all_transforms,
    apply_policy_transform,
    build_aux_vector,
    build_board_tensor,
    policy_permutation,
    state_to_numpy,
    state_to_torch,
    transform_action,
    transform_board_tensor,
)
from .registry import GameRegistry, create_default_registry

__all__ = [
    "core",
    "env",
    "features",
    "AbaloneEnv",
    "ConfigError",
    "GameConfig",
    "load_game_config",
    "GameRegistry",
    "create_default_registry",
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "Transform",
    "all_transforms",
    "apply_policy_transform",
    "build_aux_vector",
    "build_board_tensor",
    "policy_permutation",
    "state_to_numpy",
    "state_to_torch",
    "transform_action",
    "transform_board_tensor",
]
