"""
Event emitter that publishes round events to listeners and, optionally, to files.
"""

from typing import Dict, Any, Optional, List, Callable
from threading import Lock

from .run_recorder import RunRecorder


Listener = Callable[[str, Dict[str, Any]], None]


class EventEmitter:
    """Publishes round events to registered listeners and an optional run recorder."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder
        self._listeners: List[Listener] = []
        self._lock = Lock()

    def register_listener(self, listener: Listener) -> None:
        """Register a callable receiving (event_type, data) for every event."""
        with self._lock:
            self._listeners.append(listener)

    def unregister_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event to every listener and the recorder."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, data)
            except Exception as e:
                # Don't let a broken view break the round
                print(f"Error in event listener: {e}")
        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except OSError as e:
                print(f"Error recording event: {e}")

    def emit_round_start(self, players: List[Dict[str, Any]], liars: List[str], content: Optional[Dict[str, Any]],
                         starting_player: Optional[str], settings: Dict[str, Any]) -> None:
        """Emit round start event."""
        self._emit("round_start", {
            "players": players,
            "liars": liars,
            "content": content,
            "starting_player": starting_player,
            "settings": settings
        })

    def emit_phase_change(self, previous: str, phase: str) -> None:
        """Emit phase change event."""
        self._emit("phase_change", {
            "previous": previous,
            "phase": phase
        })

    def emit_reveal(self, player_id: str, reveal_index: int) -> None:
        """Emit player reveal event. The role itself is not included."""
        self._emit("reveal", {
            "player_id": player_id,
            "reveal_index": reveal_index
        })

    def emit_vote(self, voter_id: str, target_id: str, voting_index: int) -> None:
        """Emit individual vote event."""
        self._emit("vote", {
            "voter": voter_id,
            "target": target_id,
            "voting_index": voting_index
        })

    def emit_vote_result(self, vote_counts: Dict[str, int], result: Dict[str, Any]) -> None:
        """Emit vote result event."""
        self._emit("vote_result", {
            "vote_counts": vote_counts,
            "result": result
        })

    def emit_liar_guess(self, guess: str, correct: bool) -> None:
        """Emit liar guess event."""
        self._emit("liar_guess", {
            "guess": guess,
            "correct": correct
        })

    def emit_game_over(self, outcome: Optional[str], secret: str, liars: List[str]) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "outcome": outcome,
            "secret": secret,
            "liars": liars
        })

    def emit_state_update(self, state: Dict[str, Any]) -> None:
        """Emit the full round snapshot after a mutation."""
        self._emit("state_update", {
            "state": state
        })
