"""
Terminal pass-and-play front end for ShadowWord.
"""

import argparse
import random
from dataclasses import replace
from typing import Callable, List, Optional

from shadowword.config import (
    GameConfig, GameSettings, GameMode, Difficulty, LiarCountMode,
    SettingsStore, load_config
)
from shadowword.content import load_catalog_or_default
from shadowword.core import (
    GameOrchestrator, GamePhase, PlayerRoster,
    InvalidSettingsError, RoundSetupError, LiarCaught, Tie
)
from shadowword.web import EventEmitter, RunRecorder


SCREEN_CLEAR = "\n" * 40


class ShadowWordGame:
    """Main game controller for a terminal session."""

    def __init__(self, config: Optional[GameConfig] = None, event_emitter: Optional[EventEmitter] = None,
                 run_name: Optional[str] = None, input_fn: Callable[[str], str] = input):
        self.config = config or GameConfig()
        self.input = input_fn
        self.run_recorder: Optional[RunRecorder] = None

        if event_emitter is None and self.config.record_runs:
            self.run_recorder = RunRecorder(self.config.runs_dir)
            run_name = self.run_recorder.create_run(run_name)
            event_emitter = EventEmitter(self.run_recorder)
            print(f"Recording game to: {self.config.runs_dir}/{run_name}/")
        self.event_emitter = event_emitter

        # Generate seed if not provided
        if self.config.random_seed is None:
            self.config.random_seed = random.randint(0, 2**31 - 1)

        self.catalog = load_catalog_or_default(self.config.catalog_path)
        self.store = SettingsStore(self.config.settings_path) if self.config.settings_path else None
        self.orchestrator = GameOrchestrator.create(
            self.catalog,
            config=self.config,
            rng=random.Random(self.config.random_seed),
            event_emitter=self.event_emitter
        )
        self.rounds_played = 0

    def _ask_choice(self, prompt: str, count: int) -> int:
        """Ask for a number between 1 and count, returning a 0-based index."""
        while True:
            answer = self.input(prompt).strip()
            if answer.isdigit() and 1 <= int(answer) <= count:
                return int(answer) - 1
            print(f"Please enter a number from 1 to {count}.")

    def build_roster(self, names: Optional[List[str]], player_count: int) -> PlayerRoster:
        """Players from the given names, saved names, or "Player N" defaults."""
        roster = PlayerRoster()
        if names:
            roster.setup_players(len(names), names)
        else:
            saved = self.store.load_player_names() if self.store else None
            roster.setup_players(player_count, saved)
        if self.store:
            self.store.save_player_names(roster.names)
        return roster

    def _run_reveals(self) -> None:
        game = self.orchestrator
        while game.current_reveal_player is not None:
            player = game.current_reveal_player
            print(SCREEN_CLEAR)
            self.input(f"Pass the device to {player.name}. Press Enter to see your role...")
            reveal = game.current_reveal_content()
            print("-" * 60)
            print("YOU ARE THE LIAR" if reveal.is_liar else "You are innocent")
            print(reveal.content)
            if reveal.subtitle:
                print(reveal.subtitle)
            print("-" * 60)
            self.input("Press Enter to hide your role...")
            game.confirm_reveal()
        print(SCREEN_CLEAR)

    def _run_votes(self) -> None:
        game = self.orchestrator
        while game.current_voting_player is not None:
            voter = game.current_voting_player
            candidates = game.vote_candidates()
            print(f"\n{voter.name}, who is the liar?")
            for i, candidate in enumerate(candidates, 1):
                print(f"  {i}. {candidate.name}")
            choice = self._ask_choice("Your vote: ", len(candidates))
            game.record_vote(candidates[choice].id)

    def _run_liar_guess(self) -> None:
        game = self.orchestrator
        options = game.liar_guess_options
        liar = game.vote_result.liar if isinstance(game.vote_result, LiarCaught) else None
        print(f"\n--- LAST CHANCE{f' for {liar.name}' if liar else ''} ---")
        print("Guess the secret word to steal the win:")
        for i, option in enumerate(options, 1):
            print(f"  {i}. {option}")
        choice = self._ask_choice("Your guess: ", len(options))
        game.submit_liar_guess(options[choice])
        print("Correct!" if game.liar_guess_correct else "Wrong!")

    def run_round(self, settings: GameSettings, roster: PlayerRoster) -> Optional[str]:
        """
        Play one round in the terminal.
        Returns the outcome value, or None if the round could not start.
        """
        game = self.orchestrator
        try:
            if self.rounds_played == 0 or game.phase != GamePhase.GAME_OVER:
                game.start_round(settings, roster.players)
            else:
                game.play_again()
        except (InvalidSettingsError, RoundSetupError) as e:
            print(f"\nCannot start round: {e.message}")
            return None

        print("=" * 60)
        print(f"SHADOWWORD - Round {self.rounds_played + 1}")
        print("=" * 60)
        print(f"Players: {', '.join(p.name for p in game.players)}")
        print(f"Mode: {game.settings.game_mode.display_name}")

        # Reveal
        self._run_reveals()

        # Discussion
        game.start_discussion()
        print(f"\n--- DISCUSSION ---")
        if game.starting_player:
            print(f"{game.starting_player.name} gives the first clue.")
        self.input("Press Enter when you are ready to vote...")

        # Voting
        game.start_voting()
        print(f"\n--- VOTING ---")
        self._run_votes()

        # Results
        game.show_results()
        result = game.vote_result
        print(f"\n--- RESULTS ---")
        for player in sorted(game.players, key=lambda p: p.votes_received, reverse=True):
            print(f"  {player.name}: {player.votes_received} vote(s)")
        print(result.title)
        print(result.subtitle)
        if isinstance(result, Tie):
            print(f"Tied: {', '.join(p.name for p in result.players)}")

        game.continue_from_results()
        if game.phase == GamePhase.LIAR_GUESS:
            self._run_liar_guess()
            game.finish_round()

        self.rounds_played += 1
        self._print_round_summary()
        return game.outcome.value if game.outcome else None

    def _print_round_summary(self) -> None:
        """Print a formatted round summary."""
        game = self.orchestrator
        print("\n" + "=" * 60)
        print(f"GAME OVER - {game.outcome.title}")
        print(game.outcome.subtitle)
        print("=" * 60)
        if game.settings.game_mode == GameMode.WORD:
            print(f"Secret word: {game.secret_word} ({game.category_name})")
        else:
            print(f"Question: {game.main_question}")
            print(f"Liar's question: {game.liar_question}")
        print(f"Liar(s): {', '.join(p.name for p in game.liars)}")
        print(f"Random Seed: {self.config.random_seed}")

    def run_game(self, settings: GameSettings, names: Optional[List[str]] = None) -> List[str]:
        """
        Play rounds until the players stop.
        Returns the outcome of every completed round.
        """
        roster = self.build_roster(names, settings.player_count)
        outcomes = []
        while True:
            outcome = self.run_round(settings, roster)
            if outcome is None:
                break
            outcomes.append(outcome)
            again = self.input("\nPlay again? [y/N] ").strip().lower()
            if again not in ("y", "yes"):
                break
        return outcomes


def build_settings(args: argparse.Namespace, base: GameSettings) -> GameSettings:
    """Apply command line overrides to the configured settings."""
    settings = replace(base, selected_categories=set(base.selected_categories))
    if args.players:
        settings.player_count = len(args.players)
    elif args.player_count is not None:
        settings.player_count = args.player_count
    if args.mode:
        settings.game_mode = GameMode(args.mode)
    if args.difficulty:
        settings.difficulty = Difficulty(args.difficulty)
    if args.category:
        settings.selected_categories = set(args.category)
    if args.liars is not None:
        settings.liar_count_mode = LiarCountMode.FIXED
        settings.fixed_liar_count = args.liars
    if args.random_liars:
        settings.liar_count_mode = LiarCountMode.RANDOM
    return settings


def parse_players(value: str) -> List[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


def main():
    """Entry point for running a game."""
    parser = argparse.ArgumentParser(
        description="Play ShadowWord, the pass-and-play liar hunt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --players Ann,Ben,Cat,Dan        # Four players, default settings
  python main.py -n 6 --liars 2 --mode question   # Six players, two liars, question mode
  python main.py --config configs/party.yaml      # Settings from a YAML file
  python main.py --web --port 8080                # Serve the JSON API for a browser front end
        """
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="Path to YAML configuration file (default: use default config)")
    parser.add_argument("--seed", "-s", type=int, default=None,
                        help="Random seed for reproducible rounds (generated and shown if not provided)")
    parser.add_argument("--players", "-p", type=parse_players, default=None,
                        help="Comma separated player names")
    parser.add_argument("--player-count", "-n", type=int, default=None,
                        help="Number of players when no names are given")
    parser.add_argument("--mode", choices=[m.value for m in GameMode], default=None,
                        help="Game mode")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None,
                        help="Content difficulty")
    parser.add_argument("--category", action="append", default=None,
                        help="Category to play with (repeatable, default: all)")
    parser.add_argument("--liars", type=int, default=None,
                        help="Fixed number of liars")
    parser.add_argument("--random-liars", action="store_true",
                        help="Pick a random number of liars each round")
    parser.add_argument("--catalog", type=str, default=None,
                        help="JSON or YAML catalog file (default: built-in catalog)")
    parser.add_argument("--record", action="store_true",
                        help="Record round events under the runs directory")
    parser.add_argument("--run-name", "-r", type=str, default=None,
                        help="Custom name for the recorded run (default: auto-generated timestamp)")
    parser.add_argument("--web", action="store_true",
                        help="Serve the local JSON API instead of playing in the terminal")
    parser.add_argument("--port", type=int, default=None,
                        help="Port for the local web server")

    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config.random_seed = args.seed
    if args.catalog:
        config.catalog_path = args.catalog
    if args.record:
        config.record_runs = True
    if args.port is not None:
        config.port = args.port
    if args.web:
        # Roles must stay hidden in the terminal running the server
        config.use_announcements = False

    settings = build_settings(args, config.settings)

    game = ShadowWordGame(config=config, run_name=args.run_name)

    if args.web:
        from shadowword.web.game_server import GameServer

        server = GameServer(game.orchestrator, port=config.port, host=config.host, default_settings=settings)
        if args.players:
            server.roster.setup_players(len(args.players), args.players)
        server.start()
        return

    print("ShadowWord")
    print("=" * 60)
    if args.config:
        print(f"Using config: {args.config}")
    print("=" * 60)

    outcomes = game.run_game(settings, args.players)
    print(f"\nRounds played: {len(outcomes)}")

    if game.run_recorder:
        game.run_recorder.save_metadata({
            "rounds": len(outcomes),
            "outcomes": outcomes,
            "settings": settings.to_dict(),
            "random_seed": config.random_seed
        })
        run_path = game.run_recorder.get_run_path()
        if run_path:
            print(f"\nGame events saved to: {run_path}")


if __name__ == "__main__":
    main()
