from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from abalone.core import LAYOUTS, STARTING_MARBLES, GameState, initialize_game_state


class ConfigError(ValueError):
    pass


@dataclass
class GameConfig:
    marbles_to_win: int = 6  # 4 for blitz games
    max_moves: int = 200
    layout: str = "classic"
    # shaping reward per marble of difference before the game is decided
    marble_reward: float = 0.1

    def __post_init__(self) -> None:
        if not 1 <= self.marbles_to_win <= STARTING_MARBLES:
            raise ConfigError(f"marbles_to_win must be in [1, {STARTING_MARBLES}], got {self.marbles_to_win}")
        if self.max_moves < 1:
            raise ConfigError(f"max_moves must be positive, got {self.max_moves}")
        if self.layout not in LAYOUTS:
            raise ConfigError(f"Unknown layout '{self.layout}'. Available: {sorted(LAYOUTS)}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown game config keys: {sorted(unknown)}")
        return cls(**{key: value for key, value in data.items() if value is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **overrides: Any) -> "GameConfig":
        data = self.to_dict()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return GameConfig.from_dict(data)

    def new_game(self) -> GameState:
        return initialize_game_state(
            self.layout,
            max_moves=self.max_moves,
            marbles_to_win=self.marbles_to_win,
            marble_reward=self.marble_reward,
        )


def load_game_config(path: Optional[Union[str, Path]]) -> GameConfig:
    cfg: Dict[str, Any] = {}
    if path:
        cfg_path = Path(path)
        if cfg_path.exists():
            cfg = yaml.safe_load(cfg_path.read_text()) or {}
    if not isinstance(cfg, Mapping):
        raise ConfigError(f"Config file {path} must contain a mapping")
    if "game" in cfg:
        cfg = cfg["game"] or {}
        if not isinstance(cfg, Mapping):
            raise ConfigError(f"Section 'game' in {path} must be a mapping")
    return GameConfig.from_dict(cfg)
