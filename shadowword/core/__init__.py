"""
Core round components: players, round state, round engine and orchestrator.
"""

from .exceptions import (
    ShadowWordError, RoundSetupError, InvalidSettingsError, PreconditionError,
    InvalidIndexError, InvalidVoteError, PhaseTransitionError, CatalogError
)
from .player import Player, PlayerRoster, default_players
from .results import GameOutcome, LiarCaught, LiarEscaped, Tie, VoteResult
from .round_state import GamePhase, RoundState
from .round_engine import RoundEngine, RevealContent, ALLOWED_TRANSITIONS
from .orchestrator import GameOrchestrator

__all__ = [
    'ShadowWordError',
    'RoundSetupError',
    'InvalidSettingsError',
    'PreconditionError',
    'InvalidIndexError',
    'InvalidVoteError',
    'PhaseTransitionError',
    'CatalogError',
    'Player',
    'PlayerRoster',
    'default_players',
    'GameOutcome',
    'LiarCaught',
    'LiarEscaped',
    'Tie',
    'VoteResult',
    'GamePhase',
    'RoundState',
    'RoundEngine',
    'RevealContent',
    'ALLOWED_TRANSITIONS',
    'GameOrchestrator',
]
