"""Configuration loading from YAML and the environment."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field


class GameSettings(BaseModel):
    """Table size limits and reveal timings."""
    player_count: int = 4
    min_players: int = 3
    max_players: int = 12
    reveal_seconds: float = 5.0
    lock_delay_seconds: float = 0.4


class StorageSettings(BaseModel):
    path: str = ".undercover/store.yaml"


class LoggingSettings(BaseModel):
    enabled: bool = True
    dir: str = "games"


class TopicSettings(BaseModel):
    file: Optional[str] = None  # YAML topic list; bundled card pool when unset


class AppConfig(BaseModel):
    """Everything the terminal game reads at startup."""
    game: GameSettings = Field(default_factory=GameSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    topics: TopicSettings = Field(default_factory=TopicSettings)

    def clamp_player_count(self, count: int) -> int:
        """Keep a requested player count inside the configured limits."""
        return max(self.game.min_players, min(self.game.max_players, count))


def load_config(config_path: Union[str, Path] = "config/game.yaml") -> AppConfig:
    """Load configuration from a YAML file, falling back to defaults.

    ``UNDERCOVER_STORE`` and ``UNDERCOVER_LOG_DIR`` override the storage
    path and log directory.

    Raises:
        pydantic.ValidationError: If the file content has the wrong shape.
    """
    path = Path(config_path)
    data = {}
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}

    config = AppConfig.model_validate(data)

    store_path = os.getenv("UNDERCOVER_STORE")
    if store_path:
        config.storage.path = store_path
    log_dir = os.getenv("UNDERCOVER_LOG_DIR")
    if log_dir:
        config.logging.dir = log_dir

    return config
