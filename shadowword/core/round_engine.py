"""
Round engine: every mutation of the round state goes through here.
"""

import random
from dataclasses import replace
from threading import RLock
from typing import List, Optional, Dict, Any, NamedTuple, TYPE_CHECKING

from .exceptions import (
    RoundSetupError, InvalidSettingsError, PreconditionError,
    InvalidIndexError, InvalidVoteError, PhaseTransitionError
)
from .player import Player
from .results import GameOutcome, LiarCaught, LiarEscaped, Tie, VoteResult
from .round_state import GamePhase, RoundState
from ..config.game_config import GameConfig, GameMode, GameSettings
from ..content.catalog import Catalog, WordItem

if TYPE_CHECKING:
    from ..web.event_emitter import EventEmitter


GUESS_OPTION_COUNT = 4
LIAR_WORD_PROMPT = "Blend in with the group..."
LIAR_QUESTION_SUBTITLE = "Your question is different!"


class RevealContent(NamedTuple):
    """What a player sees when it is their turn to look at the device."""
    is_liar: bool
    content: str
    subtitle: Optional[str]


# Explicit phase changes (start_new_round enters ROLE_REVEAL from anywhere)
ALLOWED_TRANSITIONS = {
    GamePhase.SETUP: {GamePhase.PLAYER_NAMES},
    GamePhase.PLAYER_NAMES: {GamePhase.SETUP},
    GamePhase.ROLE_REVEAL: {GamePhase.DISCUSSION},
    GamePhase.DISCUSSION: {GamePhase.VOTING},
    GamePhase.VOTING: {GamePhase.RESULTS},
    GamePhase.RESULTS: {GamePhase.LIAR_GUESS, GamePhase.GAME_OVER},
    GamePhase.LIAR_GUESS: {GamePhase.GAME_OVER},
    GamePhase.GAME_OVER: {GamePhase.SETUP},
}


class RoundEngine:
    """Owns the round state and enforces the rules of a round."""

    def __init__(self, catalog: Catalog, config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None, event_emitter: Optional['EventEmitter'] = None):
        self.catalog = catalog
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.event_emitter = event_emitter
        self.state = RoundState()
        self.announcements: List[str] = []
        # Serializes mutations when callbacks arrive from more than one thread
        self._lock = RLock()

    def announce(self, message: str) -> None:
        """Make a host announcement."""
        self.announcements.append(message)
        if self.config.use_announcements:
            print(f"[HOST] {message}")

    def snapshot(self) -> Dict[str, Any]:
        """Plain dict copy of the current round."""
        with self._lock:
            return self.state.to_dict()

    def _publish(self) -> None:
        if self.event_emitter:
            self.event_emitter.emit_state_update(self.state.to_dict())

    # ------------------------------------------------------------------
    # Round setup
    # ------------------------------------------------------------------

    def prepare_settings(self, settings: GameSettings, player_count: int) -> GameSettings:
        """
        Settings snapshot used for a round.

        The player count follows the roster, the fixed liar count is clamped
        to it and an empty category selection means every category.
        """
        snapshot = settings.with_default_categories(self.catalog.category_names)
        snapshot = replace(snapshot, player_count=player_count)
        if snapshot.fixed_liar_count >= 1:
            snapshot.adjust_liar_count()
        return snapshot

    def start_new_round(self, settings: GameSettings, players: List[Player]) -> None:
        """
        Start a round: pick content, assign liars and the starting player.

        Raises:
            InvalidSettingsError: If the settings are not valid for these players
            RoundSetupError: If no content matches the category/difficulty filters
        """
        with self._lock:
            snapshot = self.prepare_settings(settings, len(players))
            errors = snapshot.validation_errors()
            if errors:
                raise InvalidSettingsError(errors)

            content = self.catalog.select_content(snapshot, self.rng)
            if content is None:
                raise RoundSetupError(
                    sorted(snapshot.selected_categories),
                    snapshot.difficulty.value,
                    snapshot.game_mode.value
                )

            previous = self.state.phase
            self.state.settings = snapshot
            self.state.players = list(players)
            self.state.reset_for_new_round()
            self.state.content = content

            self.assign_liars()
            self.select_starting_player()

            if snapshot.game_mode == GameMode.WORD and content.word is not None:
                all_words = self.catalog.get_all_words(snapshot.selected_categories)
                self.state.liar_guess_options = self.generate_liar_guess_options(content.word.word, all_words)

            starting = self.state.starting_player
            self.announce(f"New round with {len(players)} players. Pass the device to see your role.")
            if self.event_emitter:
                self.event_emitter.emit_phase_change(previous.value, self.state.phase.value)
                self.event_emitter.emit_round_start(
                    [{"id": p.id, "name": p.name} for p in self.state.players],
                    [p.id for p in self.state.liars],
                    content.to_dict(),
                    starting.id if starting else None,
                    snapshot.to_dict()
                )
            self._publish()

    def assign_liars(self) -> List[Player]:
        """
        Mark a random set of distinct players as liars and everyone else as innocent.

        Returns:
            The liars, in player order
        """
        with self._lock:
            players = self.state.players
            count = self.state.settings.actual_liar_count(self.rng)
            count = max(1, min(count, len(players))) if players else 0
            liar_indices = set(self.rng.sample(range(len(players)), count))

            for i, player in enumerate(players):
                player.is_liar = i in liar_indices
            return self.state.liars

    def select_starting_player(self) -> int:
        """
        Pick who gives the first clue.

        With liar_never_goes_first only innocents are eligible. If every
        player is a liar there is nobody eligible and index 0 is used, even
        though that player is a liar.
        """
        with self._lock:
            candidates = list(range(len(self.state.players)))
            if self.state.settings.liar_never_goes_first:
                candidates = [i for i in candidates if not self.state.players[i].is_liar]

            self.state.starting_player_index = self.rng.choice(candidates) if candidates else 0
            return self.state.starting_player_index

    def generate_liar_guess_options(self, correct_word: str, all_words: List[WordItem]) -> List[str]:
        """
        Build the shuffled choices offered to a caught liar.

        The correct word plus up to three other distinct catalog words, padded
        with "Unknown N" placeholders when the catalog is too small.
        """
        seen = {correct_word.lower()}
        distractors = []
        for item in all_words:
            key = item.word.lower()
            if key not in seen:
                seen.add(key)
                distractors.append(item.word)
        self.rng.shuffle(distractors)

        options = [correct_word] + distractors[:GUESS_OPTION_COUNT - 1]
        while len(options) < GUESS_OPTION_COUNT:
            options.append(f"Unknown {len(options)}")

        self.rng.shuffle(options)
        return options

    # ------------------------------------------------------------------
    # Reveal
    # ------------------------------------------------------------------

    def get_reveal_content(self, player: Optional[Player] = None) -> RevealContent:
        """Get what a player (the current reveal player by default) should see."""
        with self._lock:
            state = self.state
            if player is None:
                player = state.current_reveal_player
                if player is None:
                    raise InvalidIndexError("get_reveal_content", state.current_reveal_index, len(state.players))

            settings = state.settings
            if player.is_liar:
                if settings.game_mode == GameMode.QUESTION:
                    return RevealContent(True, state.liar_question, LIAR_QUESTION_SUBTITLE)

                lines = []
                if settings.show_category_to_liar:
                    lines.append(f"Category: {state.category_name}")
                if settings.show_hint_to_liar and state.hint:
                    lines.append(f"Hint: {state.hint}")
                return RevealContent(True, LIAR_WORD_PROMPT, "\n".join(lines) or None)

            if settings.game_mode == GameMode.QUESTION:
                return RevealContent(False, state.main_question, None)
            return RevealContent(False, state.secret_word, f"Category: {state.category_name}")

    def mark_current_player_revealed(self) -> Player:
        """
        Mark the current reveal player as having seen their role and move on.

        Raises:
            PreconditionError: If the round is not in the reveal phase
            InvalidIndexError: If every player has already revealed
        """
        with self._lock:
            state = self.state
            if state.phase != GamePhase.ROLE_REVEAL:
                raise PreconditionError("mark_current_player_revealed", f"not allowed in phase {state.phase.value}")
            if state.current_reveal_index >= len(state.players):
                raise InvalidIndexError("mark_current_player_revealed", state.current_reveal_index, len(state.players))

            player = state.players[state.current_reveal_index]
            player.has_revealed = True
            state.current_reveal_index += 1

            if self.event_emitter:
                self.event_emitter.emit_reveal(player.id, state.current_reveal_index - 1)
            self._publish()
            return player

    # ------------------------------------------------------------------
    # Voting
    # ------------------------------------------------------------------

    def record_vote(self, target_player_id: str) -> Player:
        """
        Record the current voting player's vote.

        The voter is whoever sits at current_voting_index. Self-votes are not
        checked here; callers offer only other players as targets.

        Raises:
            PreconditionError: If the round is not in the voting phase
            InvalidIndexError: If every player has already voted
            InvalidVoteError: If the target is not a player in this round
        """
        with self._lock:
            state = self.state
            if state.phase != GamePhase.VOTING:
                raise PreconditionError("record_vote", f"not allowed in phase {state.phase.value}")
            if state.current_voting_index >= len(state.players):
                raise InvalidIndexError("record_vote", state.current_voting_index, len(state.players))
            target = state.get_player(target_player_id)
            if target is None:
                raise InvalidVoteError(target_player_id)

            voter = state.players[state.current_voting_index]
            voter.has_voted = True
            voter.voted_for_id = target.id
            target.votes_received += 1
            state.current_voting_index += 1

            if self.event_emitter:
                self.event_emitter.emit_vote(voter.id, target.id, state.current_voting_index - 1)
            self._publish()
            return voter

    def vote_counts(self) -> Dict[str, int]:
        """Get votes received per player id."""
        return {p.id: p.votes_received for p in self.state.players}

    def calculate_vote_result(self) -> VoteResult:
        """
        Work out who was voted out and, where already decided, the outcome.

        A tie at the top goes to the liars. A single most-voted liar is
        caught and the outcome waits for the liar's guess. A single
        most-voted innocent means the liars win.

        Raises:
            PreconditionError: Outside voting/results, before every player has
                voted, or once the outcome is decided
        """
        with self._lock:
            state = self.state
            if not state.players:
                raise PreconditionError("calculate_vote_result", "round has no players")
            if state.phase not in (GamePhase.VOTING, GamePhase.RESULTS):
                raise PreconditionError("calculate_vote_result", f"not allowed in phase {state.phase.value}")
            if not state.all_players_voted:
                raise PreconditionError("calculate_vote_result", "not every player has voted")
            if state.outcome is not None:
                raise PreconditionError("calculate_vote_result", "the round outcome is already decided")

            max_votes = max(p.votes_received for p in state.players)
            most_voted = [p for p in state.players if p.votes_received == max_votes]

            if len(most_voted) > 1:
                state.vote_result = Tie(players=most_voted, liars=state.liars)
                state.outcome = GameOutcome.LIAR_WINS
            elif most_voted[0].is_liar:
                state.vote_result = LiarCaught(liar=most_voted[0])
                state.outcome = None
            else:
                state.vote_result = LiarEscaped(voted_player=most_voted[0], liars=state.liars)
                state.outcome = GameOutcome.LIAR_WINS

            self.announce(f"{state.vote_result.title} {state.vote_result.subtitle}")
            if self.event_emitter:
                self.event_emitter.emit_vote_result(self.vote_counts(), state.vote_result.to_dict())
            self._publish()
            return state.vote_result

    # ------------------------------------------------------------------
    # Liar guess
    # ------------------------------------------------------------------

    def should_offer_liar_guess(self) -> bool:
        """A caught liar gets a guess, but only in word mode."""
        return (
            isinstance(self.state.vote_result, LiarCaught)
            and self.state.settings.game_mode == GameMode.WORD
        )

    def process_liar_guess(self, selected_word: str) -> GameOutcome:
        """
        Settle the round with the caught liar's guess of the secret word.

        Raises:
            PreconditionError: If no liar was caught or the guess was already made
        """
        with self._lock:
            state = self.state
            if not isinstance(state.vote_result, LiarCaught):
                raise PreconditionError("process_liar_guess", "no liar has been caught")
            if state.outcome is not None:
                raise PreconditionError("process_liar_guess", "the round outcome is already decided")

            correct = selected_word.lower() == state.secret_word.lower()
            state.liar_guess_correct = correct
            state.outcome = GameOutcome.LIAR_STOLEN_WIN if correct else GameOutcome.GROUP_WINS

            self.announce(f"The liar guessed '{selected_word}'. {state.outcome.title}")
            if self.event_emitter:
                self.event_emitter.emit_liar_guess(selected_word, correct)
            self._publish()
            return state.outcome

    # ------------------------------------------------------------------
    # Phase flow
    # ------------------------------------------------------------------

    def _check_transition(self, target: GamePhase) -> None:
        state = self.state
        current = state.phase
        if target not in ALLOWED_TRANSITIONS[current]:
            raise PhaseTransitionError(current.value, target.value)

        if target == GamePhase.DISCUSSION and not state.all_players_revealed:
            raise PhaseTransitionError(current.value, target.value, "not every player has seen their role")
        if target == GamePhase.RESULTS and not state.all_players_voted:
            raise PhaseTransitionError(current.value, target.value, "not every player has voted")
        if target == GamePhase.LIAR_GUESS:
            if not self.should_offer_liar_guess() or state.outcome is not None:
                raise PhaseTransitionError(current.value, target.value, "no liar guess is on offer")
        if target == GamePhase.GAME_OVER and state.outcome is None:
            raise PhaseTransitionError(current.value, target.value, "the outcome is not decided yet")

    def proceed_to_phase(self, phase: GamePhase) -> GamePhase:
        """
        Move the round to another phase.

        Entering RESULTS computes the vote result if it is not known yet.

        Raises:
            PhaseTransitionError: If the change is not allowed right now
        """
        with self._lock:
            self._check_transition(phase)

            previous = self.state.phase
            if phase == GamePhase.RESULTS and self.state.vote_result is None:
                self.calculate_vote_result()
            self.state.phase = phase

            if phase == GamePhase.DISCUSSION and self.state.starting_player:
                self.announce(f"{self.state.starting_player.name} gives the first clue.")
            if self.event_emitter:
                self.event_emitter.emit_phase_change(previous.value, phase.value)
                if phase == GamePhase.GAME_OVER:
                    self.event_emitter.emit_game_over(
                        self.state.outcome.value if self.state.outcome else None,
                        self.state.secret_word or self.state.main_question,
                        [p.id for p in self.state.liars]
                    )
            self._publish()
            return phase

    def finish_results(self) -> GamePhase:
        """
        Leave the results screen: to the liar's guess if one is on offer, else game over.

        A liar caught in question mode gets no guess, so the group wins outright.
        """
        with self._lock:
            state = self.state
            if self.should_offer_liar_guess() and state.outcome is None:
                return self.proceed_to_phase(GamePhase.LIAR_GUESS)
            if (state.phase == GamePhase.RESULTS and isinstance(state.vote_result, LiarCaught)
                    and state.outcome is None):
                state.outcome = GameOutcome.GROUP_WINS
            return self.proceed_to_phase(GamePhase.GAME_OVER)

    def play_again(self) -> None:
        """Start a new round with the same settings and the same players (ids and names only)."""
        with self._lock:
            players = [p.identity_copy() for p in self.state.players]
            self.start_new_round(self.state.settings, players)

    def abandon_round(self) -> None:
        """Discard the round and go back to setup."""
        with self._lock:
            previous = self.state.phase
            self.state = RoundState()
            if self.event_emitter:
                self.event_emitter.emit_phase_change(previous.value, self.state.phase.value)
            self._publish()
