"""
Game orchestrator: the facade a front end uses to drive a round.
"""

import random
from typing import List, Optional, Dict, Any, TYPE_CHECKING

from .player import Player
from .results import GameOutcome, VoteResult
from .round_engine import RoundEngine, RevealContent
from .round_state import GamePhase
from ..config.game_config import GameConfig, GameSettings
from ..content.catalog import Catalog

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


class GameOrchestrator:
    """
    Delegates user intents to the round engine and exposes derived view data.

    Holds no game logic of its own: everything beyond simple ratios and
    lookups is done by the engine.
    """

    def __init__(self, engine: RoundEngine):
        self.engine = engine

    @classmethod
    def create(cls, catalog: Catalog, config: Optional[GameConfig] = None,
               rng: Optional[random.Random] = None,
               event_emitter: Optional['EventEmitter'] = None) -> "GameOrchestrator":
        return cls(RoundEngine(catalog, config=config, rng=rng, event_emitter=event_emitter))

    # Intents

    def open_player_names(self) -> GamePhase:
        return self.engine.proceed_to_phase(GamePhase.PLAYER_NAMES)

    def back_to_setup(self) -> GamePhase:
        return self.engine.proceed_to_phase(GamePhase.SETUP)

    def start_round(self, settings: GameSettings, players: List[Player]) -> None:
        self.engine.start_new_round(settings, players)

    def current_reveal_content(self) -> RevealContent:
        return self.engine.get_reveal_content()

    def reveal_content_for(self, player: Player) -> RevealContent:
        return self.engine.get_reveal_content(player)

    def confirm_reveal(self) -> Player:
        return self.engine.mark_current_player_revealed()

    def start_discussion(self) -> GamePhase:
        return self.engine.proceed_to_phase(GamePhase.DISCUSSION)

    def start_voting(self) -> GamePhase:
        return self.engine.proceed_to_phase(GamePhase.VOTING)

    def record_vote(self, target_player_id: str) -> Player:
        return self.engine.record_vote(target_player_id)

    def show_results(self) -> GamePhase:
        return self.engine.proceed_to_phase(GamePhase.RESULTS)

    def continue_from_results(self) -> GamePhase:
        return self.engine.finish_results()

    def submit_liar_guess(self, word: str) -> GameOutcome:
        return self.engine.process_liar_guess(word)

    def finish_round(self) -> GamePhase:
        return self.engine.proceed_to_phase(GamePhase.GAME_OVER)

    def play_again(self) -> None:
        self.engine.play_again()

    def abandon_round(self) -> None:
        self.engine.abandon_round()

    # Derived view data

    @property
    def phase(self) -> GamePhase:
        return self.engine.state.phase

    @property
    def players(self) -> List[Player]:
        return list(self.engine.state.players)

    @property
    def settings(self) -> GameSettings:
        return self.engine.state.settings

    @property
    def current_reveal_player(self) -> Optional[Player]:
        return self.engine.state.current_reveal_player

    @property
    def current_voting_player(self) -> Optional[Player]:
        return self.engine.state.current_voting_player

    @property
    def starting_player(self) -> Optional[Player]:
        return self.engine.state.starting_player

    @property
    def all_players_revealed(self) -> bool:
        return self.engine.state.all_players_revealed

    @property
    def all_players_voted(self) -> bool:
        return self.engine.state.all_players_voted

    @property
    def reveal_progress(self) -> float:
        return self.engine.state.reveal_progress

    @property
    def voting_progress(self) -> float:
        return self.engine.state.voting_progress

    def vote_candidates(self, voter: Optional[Player] = None) -> List[Player]:
        """Players the voter (current voting player by default) may vote for: everyone else."""
        voter = voter or self.current_voting_player
        if voter is None:
            return []
        return [p for p in self.engine.state.players if p.id != voter.id]

    @property
    def category_name(self) -> str:
        return self.engine.state.category_name

    @property
    def secret_word(self) -> str:
        return self.engine.state.secret_word

    @property
    def hint(self) -> str:
        return self.engine.state.hint

    @property
    def main_question(self) -> str:
        return self.engine.state.main_question

    @property
    def liar_question(self) -> str:
        return self.engine.state.liar_question

    @property
    def liars(self) -> List[Player]:
        return self.engine.state.liars

    @property
    def vote_result(self) -> Optional[VoteResult]:
        return self.engine.state.vote_result

    @property
    def outcome(self) -> Optional[GameOutcome]:
        return self.engine.state.outcome

    @property
    def liar_guess_options(self) -> List[str]:
        return list(self.engine.state.liar_guess_options)

    @property
    def liar_guess_correct(self) -> Optional[bool]:
        return self.engine.state.liar_guess_correct

    @property
    def should_show_liar_guess(self) -> bool:
        return self.engine.should_offer_liar_guess()

    def snapshot(self) -> Dict[str, Any]:
        return self.engine.snapshot()
