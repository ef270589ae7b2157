"""
Pytest fixtures for ShadowWord tests.
"""

import random
import pytest
from typing import List

from shadowword.config import GameConfig, GameSettings, GameMode, Difficulty
from shadowword.content import Catalog, Category, WordItem, QuestionPair
from shadowword.core import GameOrchestrator, Player, RoundEngine


@pytest.fixture
def sample_catalog() -> Catalog:
    """Small catalog with known words at each difficulty."""
    return Catalog(categories=[
        Category(
            name="Animals",
            icon="pawprint.fill",
            words=(
                WordItem("Dog", "Barks", "easy"),
                WordItem("Cat", "Purrs", "medium"),
                WordItem("Elephant", "Trunk", "medium"),
                WordItem("Giraffe", "Tall", "hard"),
            ),
            question_pairs=(
                QuestionPair("What animal would make the best pet?", "What animal would be the worst pet?", "easy"),
            ),
        ),
        Category(
            name="Food",
            icon="fork.knife",
            words=(
                WordItem("Pizza", "Slices", "easy"),
                WordItem("Sushi", "Rice", "medium"),
            ),
            question_pairs=(
                QuestionPair("What is your favorite breakfast?", "What is your favorite dinner?", "easy"),
                QuestionPair("What food could you eat every day?", "What food do you hate?", "hard"),
            ),
        ),
        Category(
            name="Rocks",
            icon="mountain.2.fill",
            words=(WordItem("Granite", "", "hard"),),
        ),
    ])


@pytest.fixture
def game_config() -> GameConfig:
    """Test configuration with announcements off for cleaner output."""
    return GameConfig(random_seed=1234, use_announcements=False)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def engine(sample_catalog, game_config, rng) -> RoundEngine:
    return RoundEngine(sample_catalog, config=game_config, rng=rng)


@pytest.fixture
def orchestrator(engine) -> GameOrchestrator:
    return GameOrchestrator(engine)


@pytest.fixture
def players() -> List[Player]:
    return [Player(name=name) for name in ["Ann", "Ben", "Cat", "Dan", "Eve"]]


@pytest.fixture
def word_settings() -> GameSettings:
    """Five players, one liar, easy Animals words."""
    return GameSettings(
        player_count=5,
        fixed_liar_count=1,
        game_mode=GameMode.WORD,
        difficulty=Difficulty.EASY,
        selected_categories={"Animals"},
    )


@pytest.fixture
def question_settings() -> GameSettings:
    return GameSettings(
        player_count=5,
        fixed_liar_count=1,
        game_mode=GameMode.QUESTION,
        difficulty=Difficulty.EASY,
        selected_categories={"Food"},
    )


def reveal_all(game: GameOrchestrator) -> None:
    """Confirm the reveal for every player."""
    while game.current_reveal_player is not None:
        game.confirm_reveal()


def play_to_voting(game: GameOrchestrator) -> None:
    """From a freshly started round, reveal everyone and open voting."""
    reveal_all(game)
    game.start_discussion()
    game.start_voting()


def vote_for(game: GameOrchestrator, choose) -> None:
    """Record a vote for every player; choose(voter, candidates) returns the target."""
    while game.current_voting_player is not None:
        voter = game.current_voting_player
        target = choose(voter, game.vote_candidates())
        game.record_vote(target.id)
