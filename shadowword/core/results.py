"""
Vote results and round outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union, Dict, Any

from .player import Player


class GameOutcome(Enum):
    """Final win/lose determination for a round."""
    GROUP_WINS = "group_wins"
    LIAR_WINS = "liar_wins"
    LIAR_STOLEN_WIN = "liar_stolen_win"  # Liar was caught but guessed the word

    @property
    def is_liar_victory(self) -> bool:
        return self in (GameOutcome.LIAR_WINS, GameOutcome.LIAR_STOLEN_WIN)

    @property
    def title(self) -> str:
        return {
            GameOutcome.GROUP_WINS: "Group Wins!",
            GameOutcome.LIAR_WINS: "Liar Wins!",
            GameOutcome.LIAR_STOLEN_WIN: "Liar Steals the Win!",
        }[self]

    @property
    def subtitle(self) -> str:
        return {
            GameOutcome.GROUP_WINS: "The group successfully identified the liar!",
            GameOutcome.LIAR_WINS: "The liar successfully blended in!",
            GameOutcome.LIAR_STOLEN_WIN: "The liar was caught but guessed the word correctly!",
        }[self]


def _names(players: List[Player]) -> str:
    return ", ".join(p.name for p in players)


@dataclass(frozen=True)
class LiarCaught:
    """The single most-voted player was a liar."""
    liar: Player
    kind: str = field(default="liar_caught", init=False)

    @property
    def title(self) -> str:
        return "Liar Caught!"

    @property
    def subtitle(self) -> str:
        return f"{self.liar.name} was the liar and got caught!"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "liar": self.liar.id}


@dataclass(frozen=True)
class LiarEscaped:
    """The single most-voted player was innocent."""
    voted_player: Optional[Player]
    liars: List[Player]
    kind: str = field(default="liar_escaped", init=False)

    @property
    def title(self) -> str:
        return "Liar Escaped!"

    @property
    def subtitle(self) -> str:
        if self.voted_player is not None:
            return f"{self.voted_player.name} was innocent! The liar was {_names(self.liars)}."
        return f"The liar {_names(self.liars)} got away!"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "voted_player": self.voted_player.id if self.voted_player else None,
            "liars": [p.id for p in self.liars],
        }


@dataclass(frozen=True)
class Tie:
    """More than one player shares the most votes. Ties go to the liar."""
    players: List[Player]
    liars: List[Player]
    kind: str = field(default="tie", init=False)

    @property
    def title(self) -> str:
        return "It's a Tie!"

    @property
    def subtitle(self) -> str:
        return f"Votes were tied! The liar {_names(self.liars)} wins!"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "players": [p.id for p in self.players],
            "liars": [p.id for p in self.liars],
        }


VoteResult = Union[LiarCaught, LiarEscaped, Tie]
