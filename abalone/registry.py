"""Explicit registry of game environment factories.

Hosts build one registry during start-up and look games up by name::

    registry = create_default_registry()
    env = registry.make("abalone-blitz")
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from abalone.config import GameConfig
from abalone.env import AbaloneEnv

logger = logging.getLogger(__name__)

EnvFactory = Callable[..., Any]


class GameRegistry:
    def __init__(self) -> None:
        self._factories: Dict[str, EnvFactory] = {}

    def register(self, name: str, factory: EnvFactory) -> None:
        if name in self._factories:
            logger.warning("Overwriting registered game: %s", name)
        self._factories[name] = factory
        logger.debug("Registered game: %s", name)

    def unregister(self, name: str) -> bool:
        if name in self._factories:
            del self._factories[name]
            logger.debug("Unregistered game: %s", name)
            return True
        return False

    def make(self, name: str, **kwargs: Any) -> Any:
        if name not in self._factories:
            raise KeyError(f"Unknown game '{name}'. Registered: {self.names()}")
        return self._factories[name](**kwargs)

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories


def _blitz_env(**kwargs: Any) -> AbaloneEnv:
    config = kwargs.pop("config", None) or GameConfig()
    return AbaloneEnv(config=config.replace(marbles_to_win=4), **kwargs)


def create_default_registry() -> GameRegistry:
    registry = GameRegistry()
    registry.register("abalone", AbaloneEnv)
    registry.register("abalone-blitz", _blitz_env)
    return registry
