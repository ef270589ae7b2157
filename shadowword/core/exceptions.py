"""
Exceptions raised by the round engine.

None of these are fatal: the engine refuses the operation without mutating
the round and the caller decides how to recover.
"""

from typing import List, Optional


class ShadowWordError(Exception):
    """Base class for all game errors."""


class RoundSetupError(ShadowWordError):
    """Raised when no content survives the category/difficulty filters."""

    def __init__(self, categories: List[str], difficulty: str, game_mode: str, message: str = ""):
        self.categories = categories
        self.difficulty = difficulty
        self.game_mode = game_mode
        self.message = message or (
            f"No {game_mode} content available for difficulty '{difficulty}' "
            f"in categories {sorted(categories) or 'ALL'}"
        )
        super().__init__(self.message)


class InvalidSettingsError(ShadowWordError):
    """Raised when game settings fail validation and a round cannot start."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        self.message = "Invalid game settings: " + "; ".join(errors)
        super().__init__(self.message)


class PreconditionError(ShadowWordError):
    """Raised when an operation is not allowed in the current round state."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}: {message}")


class InvalidIndexError(PreconditionError):
    """Raised when a reveal or vote is recorded after every player has acted."""

    def __init__(self, operation: str, index: int, player_count: int):
        self.index = index
        self.player_count = player_count
        super().__init__(
            operation,
            f"index {index} is already at or beyond player count {player_count}"
        )


class InvalidVoteError(PreconditionError):
    """Raised when a vote targets a player that is not in the round."""

    def __init__(self, target_id: str, message: Optional[str] = None):
        self.target_id = target_id
        super().__init__("record_vote", message or f"unknown vote target {target_id}")


class PhaseTransitionError(PreconditionError):
    """Raised when a phase change is not allowed from the current phase."""

    def __init__(self, current: str, requested: str, reason: str = "transition not allowed"):
        self.current = current
        self.requested = requested
        super().__init__("proceed_to_phase", f"{current} -> {requested}: {reason}")


class CatalogError(ShadowWordError):
    """Raised when a content catalog document cannot be read or parsed."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")
