"""
Round state: the authoritative record of one game round.
"""

from enum import Enum
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from .player import Player
from .results import GameOutcome, VoteResult
from ..config.game_config import GameSettings
from ..content.catalog import RoundContent


class GamePhase(Enum):
    """Current round phase."""
    SETUP = "setup"
    PLAYER_NAMES = "player_names"
    ROLE_REVEAL = "role_reveal"  # Pass-and-play role reveal
    DISCUSSION = "discussion"  # Clue-giving
    VOTING = "voting"
    RESULTS = "results"
    LIAR_GUESS = "liar_guess"  # Caught liar's last chance
    GAME_OVER = "game_over"

    @property
    def display_title(self) -> str:
        return {
            GamePhase.SETUP: "Setup",
            GamePhase.PLAYER_NAMES: "Players",
            GamePhase.ROLE_REVEAL: "Reveal Roles",
            GamePhase.DISCUSSION: "Discussion",
            GamePhase.VOTING: "Voting",
            GamePhase.RESULTS: "Results",
            GamePhase.LIAR_GUESS: "Last Chance",
            GamePhase.GAME_OVER: "Game Over",
        }[self]

    @property
    def instruction(self) -> str:
        return {
            GamePhase.SETUP: "Configure your game settings",
            GamePhase.PLAYER_NAMES: "Enter player names",
            GamePhase.ROLE_REVEAL: "Pass the device to see your role",
            GamePhase.DISCUSSION: "Give clues and find the liar!",
            GamePhase.VOTING: "Vote for who you think is the liar",
            GamePhase.RESULTS: "See who got caught!",
            GamePhase.LIAR_GUESS: "The liar gets one last chance...",
            GamePhase.GAME_OVER: "Game complete!",
        }[self]


@dataclass
class RoundState:
    """Complete round state. Mutated only by the round engine."""
    phase: GamePhase = GamePhase.SETUP
    players: List[Player] = field(default_factory=list)
    settings: GameSettings = field(default_factory=GameSettings)
    content: Optional[RoundContent] = None

    starting_player_index: int = 0
    current_reveal_index: int = 0
    current_voting_index: int = 0

    # Results
    vote_result: Optional[VoteResult] = None
    outcome: Optional[GameOutcome] = None
    liar_guess_options: List[str] = field(default_factory=list)
    liar_guess_correct: Optional[bool] = None

    @property
    def current_reveal_player(self) -> Optional[Player]:
        if self.current_reveal_index < len(self.players):
            return self.players[self.current_reveal_index]
        return None

    @property
    def current_voting_player(self) -> Optional[Player]:
        if self.current_voting_index < len(self.players):
            return self.players[self.current_voting_index]
        return None

    @property
    def starting_player(self) -> Optional[Player]:
        if 0 <= self.starting_player_index < len(self.players):
            return self.players[self.starting_player_index]
        return None

    @property
    def liars(self) -> List[Player]:
        return [p for p in self.players if p.is_liar]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    @property
    def category_name(self) -> str:
        return self.content.category.name if self.content else "Unknown"

    @property
    def secret_word(self) -> str:
        return self.content.secret_word if self.content else ""

    @property
    def hint(self) -> str:
        return self.content.hint if self.content else ""

    @property
    def main_question(self) -> str:
        return self.content.main_question if self.content else ""

    @property
    def liar_question(self) -> str:
        return self.content.liar_question if self.content else ""

    @property
    def all_players_revealed(self) -> bool:
        return all(p.has_revealed for p in self.players)

    @property
    def all_players_voted(self) -> bool:
        return all(p.has_voted for p in self.players)

    @property
    def reveal_progress(self) -> float:
        if not self.players:
            return 0.0
        return sum(1 for p in self.players if p.has_revealed) / len(self.players)

    @property
    def voting_progress(self) -> float:
        if not self.players:
            return 0.0
        return sum(1 for p in self.players if p.has_voted) / len(self.players)

    def reset_for_new_round(self) -> None:
        """Clear round fields and every player's role/vote state, keeping ids and names."""
        self.phase = GamePhase.ROLE_REVEAL
        self.content = None
        self.starting_player_index = 0
        self.current_reveal_index = 0
        self.current_voting_index = 0
        self.vote_result = None
        self.outcome = None
        self.liar_guess_options = []
        self.liar_guess_correct = None

        for player in self.players:
            player.reset_round_fields()

    def to_dict(self) -> Dict[str, Any]:
        """Plain snapshot of the round, safe to serialize and hand to a view."""
        return {
            "phase": self.phase.value,
            "players": [p.to_dict() for p in self.players],
            "settings": self.settings.to_dict(),
            "content": self.content.to_dict() if self.content else None,
            "starting_player_index": self.starting_player_index,
            "current_reveal_index": self.current_reveal_index,
            "current_voting_index": self.current_voting_index,
            "reveal_progress": self.reveal_progress,
            "voting_progress": self.voting_progress,
            "vote_result": self.vote_result.to_dict() if self.vote_result else None,
            "outcome": self.outcome.value if self.outcome else None,
            "liar_guess_options": list(self.liar_guess_options),
            "liar_guess_correct": self.liar_guess_correct,
        }
