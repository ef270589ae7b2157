"""Game configuration module."""

from .game_config import (
    GameConfig, GameSettings, GameMode, Difficulty, LiarCountMode,
    MIN_PLAYERS, MAX_PLAYERS, default_config
)
from .config_loader import load_config, load_config_from_yaml
from .settings_store import SettingsStore

__all__ = [
    'GameConfig', 'GameSettings', 'GameMode', 'Difficulty', 'LiarCountMode',
    'MIN_PLAYERS', 'MAX_PLAYERS', 'default_config',
    'load_config', 'load_config_from_yaml', 'SettingsStore',
]
