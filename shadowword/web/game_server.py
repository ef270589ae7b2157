"""
Local web server for playing a round from a browser on the same device.
"""

from typing import Optional, Dict, Any, List
from flask import Flask, jsonify, request

from ..config.game_config import GameSettings
from ..core import (
    GameOrchestrator, GamePhase, Player, PlayerRoster,
    InvalidSettingsError, RoundSetupError, PreconditionError
)

# Phases in which roles and content may be shown to everyone
PUBLIC_PHASES = {GamePhase.RESULTS, GamePhase.LIAR_GUESS, GamePhase.GAME_OVER}


class GameServer:
    """JSON API over a game orchestrator."""

    def __init__(self, orchestrator: GameOrchestrator, port: int = 5000, host: str = '127.0.0.1',
                 default_settings: Optional[GameSettings] = None):
        self.port = port
        self.host = host
        self.orchestrator = orchestrator
        self.default_settings = default_settings or GameSettings()
        self.roster = PlayerRoster()
        self.app = Flask(__name__)

        self._setup_error_handlers()
        self._setup_routes()

    def _public_state(self) -> Dict[str, Any]:
        """Snapshot with roles and content hidden until the results are in."""
        state = self.orchestrator.snapshot()
        if self.orchestrator.phase in PUBLIC_PHASES:
            return state
        for player in state["players"]:
            player.pop("is_liar", None)
        state["content"] = None
        state["liar_guess_options"] = []
        return state

    def _setup_error_handlers(self):
        @self.app.errorhandler(InvalidSettingsError)
        def handle_invalid_settings(e: InvalidSettingsError):
            return jsonify({"error": e.message, "errors": e.errors}), 400

        @self.app.errorhandler(RoundSetupError)
        def handle_setup_failure(e: RoundSetupError):
            return jsonify({"error": e.message}), 400

        @self.app.errorhandler(PreconditionError)
        def handle_precondition(e: PreconditionError):
            return jsonify({"error": str(e), "operation": e.operation}), 409

    def _setup_routes(self):
        """Setup Flask routes."""
        @self.app.route('/api/state')
        def get_state():
            return jsonify(self._public_state())

        @self.app.route('/api/round', methods=['POST'])
        def start_round():
            body = request.get_json(silent=True) or {}
            try:
                settings = GameSettings.from_dict(body["settings"]) if "settings" in body else self.default_settings
            except (ValueError, TypeError) as e:
                return jsonify({"error": f"Invalid settings: {e}"}), 400

            names: List[str] = body.get("players") or []
            if names:
                self.roster.setup_players(len(names), names)
            elif not self.roster.players:
                self.roster.setup_players(settings.player_count)
            players = [Player(name=p.name, id=p.id) for p in self.roster.players]

            self.orchestrator.start_round(settings, players)
            return jsonify(self._public_state()), 201

        @self.app.route('/api/reveal', methods=['GET'])
        def get_reveal():
            player = self.orchestrator.current_reveal_player
            reveal = self.orchestrator.current_reveal_content()
            return jsonify({
                "player": {"id": player.id, "name": player.name},
                "is_liar": reveal.is_liar,
                "content": reveal.content,
                "subtitle": reveal.subtitle
            })

        @self.app.route('/api/reveal', methods=['POST'])
        def confirm_reveal():
            player = self.orchestrator.confirm_reveal()
            return jsonify({"revealed": player.id, "progress": self.orchestrator.reveal_progress})

        @self.app.route('/api/vote', methods=['GET'])
        def get_vote_candidates():
            voter = self.orchestrator.current_voting_player
            return jsonify({
                "voter": {"id": voter.id, "name": voter.name} if voter else None,
                "candidates": [{"id": p.id, "name": p.name} for p in self.orchestrator.vote_candidates()]
            })

        @self.app.route('/api/vote', methods=['POST'])
        def record_vote():
            body = request.get_json(silent=True) or {}
            target_id = body.get("target_id")
            if not target_id:
                return jsonify({"error": "target_id is required"}), 400
            voter = self.orchestrator.current_voting_player
            if voter is not None and voter.id == target_id:
                return jsonify({"error": "Players cannot vote for themselves"}), 400
            self.orchestrator.record_vote(target_id)
            return jsonify({"voter": voter.id if voter else None, "progress": self.orchestrator.voting_progress})

        @self.app.route('/api/phase', methods=['POST'])
        def change_phase():
            body = request.get_json(silent=True) or {}
            try:
                phase = GamePhase(body.get("phase"))
            except ValueError:
                return jsonify({"error": f"Unknown phase: {body.get('phase')}"}), 400
            if phase == GamePhase.RESULTS:
                self.orchestrator.show_results()
            elif (phase == GamePhase.GAME_OVER and self.orchestrator.phase == GamePhase.RESULTS
                    and not self.orchestrator.should_show_liar_guess):
                # Settles a liar caught in question mode
                self.orchestrator.continue_from_results()
            else:
                self.orchestrator.engine.proceed_to_phase(phase)
            return jsonify(self._public_state())

        @self.app.route('/api/continue', methods=['POST'])
        def continue_from_results():
            """Leave the results screen for the liar's guess or the end of the round."""
            self.orchestrator.continue_from_results()
            return jsonify(self._public_state())

        @self.app.route('/api/liar-guess', methods=['POST'])
        def liar_guess():
            body = request.get_json(silent=True) or {}
            word = body.get("word")
            if not isinstance(word, str):
                return jsonify({"error": "word is required"}), 400
            outcome = self.orchestrator.submit_liar_guess(word)
            return jsonify({
                "correct": self.orchestrator.liar_guess_correct,
                "outcome": outcome.value,
                "liar_victory": outcome.is_liar_victory,
                "title": outcome.title
            })

        @self.app.route('/api/play-again', methods=['POST'])
        def play_again():
            self.orchestrator.play_again()
            return jsonify(self._public_state()), 201

    def start(self) -> None:
        """Start the web server."""
        print(f"\n{'='*60}")
        print(f"Starting ShadowWord server on http://{self.host}:{self.port}")
        print(f"{'='*60}\n")
        self.app.run(host=self.host, port=self.port, debug=False, use_reloader=False)
