"""
Integration tests for full game flow through the terminal front end.
"""

import argparse
import pytest
from unittest.mock import Mock

from main import ShadowWordGame, build_settings, parse_players
from shadowword.config import GameConfig, GameSettings, GameMode, Difficulty, LiarCountMode


NAMES = ["Ann", "Ben", "Cat", "Dan"]


def scripted_input(play_again_answers=("n",)):
    """Input function that picks option 1 everywhere and answers the play again prompts in order."""
    answers = list(play_again_answers)

    def answer(prompt):
        if "again" in prompt.lower():
            return answers.pop(0) if answers else "n"
        return "1"
    return Mock(side_effect=answer)


@pytest.fixture
def quiet_config():
    return GameConfig(random_seed=2024, use_announcements=False)


def test_full_game_flow(quiet_config, capsys):
    """Test a complete round with scripted input."""
    input_fn = scripted_input()
    game = ShadowWordGame(quiet_config, input_fn=input_fn)

    outcomes = game.run_game(GameSettings(player_count=4, selected_categories={"Animals"}), NAMES)

    assert len(outcomes) == 1
    assert outcomes[0] in ("group_wins", "liar_wins", "liar_stolen_win")
    assert game.orchestrator.phase.value == "game_over"
    assert all(p.has_revealed and p.has_voted for p in game.orchestrator.players)

    output = capsys.readouterr().out
    assert "GAME OVER" in output
    assert "Secret word:" in output
    assert "Random Seed: 2024" in output

    # Two prompts per reveal, one for discussion, one per vote, and the play again question
    assert input_fn.call_count >= 2 * len(NAMES) + 1 + len(NAMES) + 1


def test_play_again_keeps_players(quiet_config):
    game = ShadowWordGame(quiet_config, input_fn=scripted_input(("y", "n")))

    outcomes = game.run_game(GameSettings(player_count=4), NAMES)

    assert len(outcomes) == 2
    assert game.rounds_played == 2
    assert [p.name for p in game.orchestrator.players] == NAMES


def test_question_mode_game(quiet_config, capsys):
    game = ShadowWordGame(quiet_config, input_fn=scripted_input())

    outcomes = game.run_game(GameSettings(player_count=4, game_mode=GameMode.QUESTION), NAMES)

    assert len(outcomes) == 1
    assert "Liar's question:" in capsys.readouterr().out


def test_invalid_settings_end_game(quiet_config, capsys):
    game = ShadowWordGame(quiet_config, input_fn=scripted_input())

    outcomes = game.run_game(GameSettings(fixed_liar_count=0), NAMES)

    assert outcomes == []
    assert "Cannot start round" in capsys.readouterr().out


def test_same_seed_same_game():
    """Test that a seeded game replays identically."""
    results = []
    for _ in range(2):
        game = ShadowWordGame(GameConfig(random_seed=5, use_announcements=False), input_fn=scripted_input())
        game.run_game(GameSettings(player_count=5), ["A", "B", "C", "D", "E"])
        results.append((game.orchestrator.secret_word, [p.name for p in game.orchestrator.liars]))

    assert results[0] == results[1]


def test_seed_generated_when_missing():
    game = ShadowWordGame(GameConfig(use_announcements=False), input_fn=scripted_input())
    assert game.config.random_seed is not None


def test_saved_player_names_are_reused(tmp_path, quiet_config):
    quiet_config.settings_path = str(tmp_path / "settings.yaml")
    game = ShadowWordGame(quiet_config, input_fn=scripted_input())
    game.run_game(GameSettings(player_count=4), NAMES)

    again = ShadowWordGame(quiet_config, input_fn=scripted_input())
    roster = again.build_roster(None, 4)

    assert roster.names == NAMES
    assert again.build_roster(None, 5).names == ["Player 1", "Player 2", "Player 3", "Player 4", "Player 5"]


def test_recorded_game(tmp_path, quiet_config):
    quiet_config.record_runs = True
    quiet_config.runs_dir = str(tmp_path / "runs")

    game = ShadowWordGame(quiet_config, run_name="test_run", input_fn=scripted_input())
    game.run_game(GameSettings(player_count=4), NAMES)

    runs = game.run_recorder.list_runs()
    assert runs[0]["name"] == "test_run"
    assert runs[0]["rounds_played"] == 1


def test_build_settings_overrides():
    args = argparse.Namespace(
        players=["Ann", "Ben", "Cat", "Dan", "Eve", "Fay"],
        player_count=None,
        mode="question",
        difficulty="hard",
        category=["Food"],
        liars=2,
        random_liars=False,
    )
    base = GameSettings(selected_categories={"Animals"})

    settings = build_settings(args, base)

    assert settings.player_count == 6
    assert settings.game_mode == GameMode.QUESTION
    assert settings.difficulty == Difficulty.HARD
    assert settings.selected_categories == {"Food"}
    assert settings.liar_count_mode == LiarCountMode.FIXED
    assert settings.fixed_liar_count == 2
    assert base.selected_categories == {"Animals"}


def test_parse_players():
    assert parse_players(" Ann, Ben ,,Cat ") == ["Ann", "Ben", "Cat"]
