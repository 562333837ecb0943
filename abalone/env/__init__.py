"""Gymnasium host for Abalone."""

from .gym_env import AbaloneEnv, render_ascii

__all__ = ["AbaloneEnv", "render_ascii"]
