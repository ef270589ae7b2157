"""
Game configuration and round settings.
"""

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Set, List, Dict, Any, Iterable, Tuple


MIN_PLAYERS = 3
MAX_PLAYERS = 100
MAX_RANDOM_LIARS = 3


class GameMode(Enum):
    """What the players are given to talk about."""
    WORD = "word"  # Everyone gets the same secret word
    QUESTION = "question"  # Liar gets a different question

    @property
    def display_name(self) -> str:
        return "Word Mode" if self == GameMode.WORD else "Find the Liar"


class Difficulty(Enum):
    """Content difficulty tier."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Difficulty":
        """Parse a difficulty string, treating unknown values as medium."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.MEDIUM

    def allowed_tiers(self) -> Set["Difficulty"]:
        """Tiers included at this difficulty (current one and every easier one)."""
        if self == Difficulty.EASY:
            return {Difficulty.EASY}
        if self == Difficulty.MEDIUM:
            return {Difficulty.EASY, Difficulty.MEDIUM}
        return {Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD}


class LiarCountMode(Enum):
    """How the number of liars is decided."""
    FIXED = "fixed"
    RANDOM = "random"


@dataclass
class GameSettings:
    """Settings for a round, chosen before players enter their names."""

    player_count: int = 4
    liar_count_mode: LiarCountMode = LiarCountMode.FIXED
    fixed_liar_count: int = 1
    game_mode: GameMode = GameMode.WORD
    selected_categories: Set[str] = field(default_factory=set)  # empty means all
    difficulty: Difficulty = Difficulty.MEDIUM

    # Liar assists
    show_category_to_liar: bool = True
    show_hint_to_liar: bool = False
    liar_never_goes_first: bool = True

    @property
    def max_liar_count(self) -> int:
        return max(1, self.player_count // 3)

    @property
    def recommended_liar_range(self) -> Tuple[int, int]:
        return 1, min(MAX_RANDOM_LIARS, self.max_liar_count)

    def actual_liar_count(self, rng: Optional[random.Random] = None) -> int:
        """
        Number of liars for a round.

        Fixed mode clamps to max_liar_count. Random mode draws uniformly from
        recommended_liar_range using the given random source.
        """
        if self.liar_count_mode == LiarCountMode.FIXED:
            return min(self.fixed_liar_count, self.max_liar_count)
        low, high = self.recommended_liar_range
        return (rng or random).randint(low, high)

    def adjust_liar_count(self) -> None:
        """Clamp the fixed liar count after the player count changed."""
        if self.fixed_liar_count > self.max_liar_count:
            self.fixed_liar_count = self.max_liar_count

    def with_default_categories(self, all_categories: Iterable[str]) -> "GameSettings":
        """Copy of these settings with an empty category set replaced by all categories."""
        if self.selected_categories:
            return replace(self, selected_categories=set(self.selected_categories))
        return replace(self, selected_categories=set(all_categories))

    def validation_errors(self) -> List[str]:
        """Get every failed validation rule (empty when valid)."""
        errors = []
        if self.player_count < MIN_PLAYERS:
            errors.append(f"player_count must be at least {MIN_PLAYERS} (got {self.player_count})")
        if self.fixed_liar_count < 1:
            errors.append(f"fixed_liar_count must be at least 1 (got {self.fixed_liar_count})")
        elif self.fixed_liar_count > self.max_liar_count:
            errors.append(
                f"fixed_liar_count {self.fixed_liar_count} exceeds max_liar_count {self.max_liar_count}"
            )
        if not self.selected_categories:
            errors.append("no categories selected")
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for YAML/JSON persistence."""
        return {
            "player_count": self.player_count,
            "liar_count_mode": self.liar_count_mode.value,
            "fixed_liar_count": self.fixed_liar_count,
            "game_mode": self.game_mode.value,
            "selected_categories": sorted(self.selected_categories),
            "difficulty": self.difficulty.value,
            "show_category_to_liar": self.show_category_to_liar,
            "show_hint_to_liar": self.show_hint_to_liar,
            "liar_never_goes_first": self.liar_never_goes_first,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        """Build settings from a dict, using defaults for missing values."""
        settings = cls()
        if "player_count" in data:
            settings.player_count = int(data["player_count"])
        if "liar_count_mode" in data:
            settings.liar_count_mode = LiarCountMode(data["liar_count_mode"])
        if "fixed_liar_count" in data:
            settings.fixed_liar_count = int(data["fixed_liar_count"])
        if "game_mode" in data:
            settings.game_mode = GameMode(data["game_mode"])
        if "selected_categories" in data:
            settings.selected_categories = set(data["selected_categories"] or [])
        if "difficulty" in data:
            settings.difficulty = Difficulty(data["difficulty"])
        for flag in ("show_category_to_liar", "show_hint_to_liar", "liar_never_goes_first"):
            if flag in data:
                setattr(settings, flag, bool(data[flag]))
        return settings


@dataclass
class GameConfig:
    """Application-level configuration."""

    # Randomness
    random_seed: Optional[int] = None  # Seed for reproducible rounds

    # Host announcements
    use_announcements: bool = True

    # Content
    catalog_path: Optional[str] = None  # JSON/YAML catalog; built-in catalog if None

    # Recording
    record_runs: bool = False
    runs_dir: str = "runs"

    # Saved settings and player names
    settings_path: Optional[str] = None

    # Local web server
    host: str = "127.0.0.1"
    port: int = 5000

    # Settings used when none are given on the command line
    settings: GameSettings = field(default_factory=GameSettings)


# Default configuration instance
default_config = GameConfig()
