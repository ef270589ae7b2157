"""
Key-value store for saved settings, player names and favorite categories.
"""

import yaml
from pathlib import Path
from threading import Lock
from typing import Dict, Any, List, Optional, Set

from .game_config import GameSettings


SETTINGS_KEY = "shadowword.settings"
PLAYER_NAMES_KEY = "shadowword.playerNames"
FAVORITE_CATEGORIES_KEY = "shadowword.favoriteCategories"


class SettingsStore:
    """Stores values in a single YAML mapping on disk."""

    def __init__(self, path: str = "shadowword_settings.yaml"):
        self.path = Path(path)
        self._lock = Lock()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            print(f"Warning: Could not read settings file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            yaml.safe_dump(data, f, sort_keys=True)

    def _set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def _remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)

    def save_settings(self, settings: GameSettings) -> None:
        self._set(SETTINGS_KEY, settings.to_dict())

    def load_settings(self) -> GameSettings:
        """Load saved settings, or defaults if nothing usable was saved."""
        with self._lock:
            data = self._read().get(SETTINGS_KEY)
        if not isinstance(data, dict):
            return GameSettings()
        try:
            return GameSettings.from_dict(data)
        except (ValueError, TypeError) as e:
            print(f"Warning: Ignoring saved settings: {e}")
            return GameSettings()

    def reset_settings(self) -> None:
        self._remove(SETTINGS_KEY)

    def save_player_names(self, names: List[str]) -> None:
        self._set(PLAYER_NAMES_KEY, list(names))

    def load_player_names(self) -> Optional[List[str]]:
        with self._lock:
            names = self._read().get(PLAYER_NAMES_KEY)
        if not isinstance(names, list):
            return None
        return [str(name) for name in names]

    def save_favorite_categories(self, categories: Set[str]) -> None:
        self._set(FAVORITE_CATEGORIES_KEY, sorted(categories))

    def load_favorite_categories(self) -> Set[str]:
        with self._lock:
            categories = self._read().get(FAVORITE_CATEGORIES_KEY)
        return set(categories) if isinstance(categories, list) else set()

    def reset_all(self) -> None:
        """Delete every saved value."""
        with self._lock:
            if self.path.exists():
                self.path.unlink()
