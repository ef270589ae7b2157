"""
Player class representing a game participant.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from ..config.game_config import MIN_PLAYERS, MAX_PLAYERS


def new_player_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Player:
    """Represents a player in the game."""
    name: str
    id: str = field(default_factory=new_player_id)

    # Per-round state
    is_liar: bool = False
    has_revealed: bool = False
    has_voted: bool = False
    voted_for_id: Optional[str] = None
    votes_received: int = 0

    def __str__(self) -> str:
        return f"{self.name} ({'liar' if self.is_liar else 'innocent'})"

    def reset_round_fields(self) -> None:
        """Clear role and vote state, keeping id and name."""
        self.is_liar = False
        self.has_revealed = False
        self.has_voted = False
        self.voted_for_id = None
        self.votes_received = 0

    def identity_copy(self) -> "Player":
        """New player with the same id and name and no round state."""
        return Player(name=self.name, id=self.id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_liar": self.is_liar,
            "has_revealed": self.has_revealed,
            "has_voted": self.has_voted,
            "voted_for_id": self.voted_for_id,
            "votes_received": self.votes_received,
        }


def default_player_name(index: int) -> str:
    return f"Player {index + 1}"


def default_players(count: int) -> List[Player]:
    """Create players named "Player 1" to "Player N"."""
    return [Player(name=default_player_name(i)) for i in range(count)]


class PlayerRoster:
    """Player list edited on the names screen before a round starts."""

    def __init__(self, players: Optional[List[Player]] = None):
        self.players: List[Player] = players or []

    def setup_players(self, count: int, saved_names: Optional[List[str]] = None) -> None:
        """
        Create count players.

        Saved names are reused only when there is exactly one per player.
        """
        if saved_names and len(saved_names) == count:
            self.players = [Player(name=name) for name in saved_names]
        else:
            self.players = default_players(count)

    def update_player_name(self, index: int, name: str) -> bool:
        """Rename a player. Blank names fall back to the default name."""
        if index < 0 or index >= len(self.players):
            return False
        name = name.strip()
        self.players[index].name = name or default_player_name(index)
        return True

    def add_player(self) -> Optional[Player]:
        if len(self.players) >= MAX_PLAYERS:
            return None
        player = Player(name=default_player_name(len(self.players)))
        self.players.append(player)
        return player

    def remove_player(self, index: int) -> bool:
        if len(self.players) <= MIN_PLAYERS or index < 0 or index >= len(self.players):
            return False
        del self.players[index]
        return True

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.players]

    @property
    def player_count(self) -> int:
        return len(self.players)
