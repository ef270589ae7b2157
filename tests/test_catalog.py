"""
Tests for the content catalog and catalog loading.
"""

import json
import random
import pytest

from shadowword.config import GameSettings, GameMode, Difficulty
from shadowword.content import (
    Catalog, Category, WordItem, QuestionPair, RoundContent,
    parse_catalog, load_catalog, load_builtin_catalog, load_catalog_or_default
)
from shadowword.core import CatalogError


def test_difficulty_filter_is_cumulative(sample_catalog):
    """Test that each difficulty includes every easier tier."""
    animals = sample_catalog.category("Animals")

    assert [w.word for w in animals.words_for(Difficulty.EASY)] == ["Dog"]
    assert [w.word for w in animals.words_for(Difficulty.MEDIUM)] == ["Dog", "Cat", "Elephant"]
    assert [w.word for w in animals.words_for(Difficulty.HARD)] == ["Dog", "Cat", "Elephant", "Giraffe"]


def test_question_filter_is_cumulative(sample_catalog):
    food = sample_catalog.category("Food")

    assert len(food.questions_for(Difficulty.EASY)) == 1
    assert len(food.questions_for(Difficulty.MEDIUM)) == 1
    assert len(food.questions_for(Difficulty.HARD)) == 2


def test_unknown_difficulty_counts_as_medium():
    item = WordItem("Mystery", "", "legendary")
    assert item.difficulty_level == Difficulty.MEDIUM


def test_select_word_content(sample_catalog):
    """Test word selection within the chosen category and difficulty."""
    settings = GameSettings(difficulty=Difficulty.EASY, selected_categories={"Animals"})

    content = sample_catalog.select_content(settings, random.Random(0))

    assert content is not None
    assert content.category.name == "Animals"
    assert content.secret_word == "Dog"
    assert content.hint == "Barks"
    assert content.question_pair is None


def test_select_question_content(sample_catalog):
    settings = GameSettings(
        game_mode=GameMode.QUESTION,
        difficulty=Difficulty.EASY,
        selected_categories={"Food"},
    )

    content = sample_catalog.select_content(settings, random.Random(0))

    assert content.word is None
    assert content.main_question == "What is your favorite breakfast?"
    assert content.liar_question == "What is your favorite dinner?"
    assert content.secret_word == ""


def test_empty_selection_means_all_categories(sample_catalog):
    settings = GameSettings(difficulty=Difficulty.HARD, selected_categories=set())
    rng = random.Random(3)

    seen = {sample_catalog.select_content(settings, rng).category.name for _ in range(60)}

    assert seen == {"Animals", "Food", "Rocks"}


def test_impossible_filter_returns_none(sample_catalog):
    """Test that a category with nothing at the difficulty yields no content."""
    easy_rocks = GameSettings(difficulty=Difficulty.EASY, selected_categories={"Rocks"})
    rock_questions = GameSettings(game_mode=GameMode.QUESTION, difficulty=Difficulty.HARD,
                                  selected_categories={"Rocks"})
    missing = GameSettings(selected_categories={"Nope"})

    assert sample_catalog.select_content(easy_rocks, random.Random(0)) is None
    assert sample_catalog.select_content(rock_questions, random.Random(0)) is None
    assert sample_catalog.select_content(missing, random.Random(0)) is None


def test_get_all_words(sample_catalog):
    words = [w.word for w in sample_catalog.get_all_words({"Animals", "Food"})]
    assert words == ["Dog", "Cat", "Elephant", "Giraffe", "Pizza", "Sushi"]

    assert len(sample_catalog.get_all_words(set())) == 7


def test_round_content_requires_exactly_one_item():
    category = Category(name="Animals")

    with pytest.raises(ValueError):
        RoundContent(category=category)
    with pytest.raises(ValueError):
        RoundContent(category=category, word=WordItem("Dog"), question_pair=QuestionPair("a", "b"))


def test_parse_json_catalog():
    """Test that JSON-shaped documents parse."""
    document = json.dumps({
        "categories": [{
            "name": "Animals",
            "icon": "pawprint.fill",
            "words": [{"word": "Dog", "hint": "Barks", "difficulty": "easy"}],
            "questionPairs": [{"mainQuestion": "Best pet?", "liarQuestion": "Worst pet?", "difficulty": "easy"}],
        }]
    })

    catalog = parse_catalog(document)

    animals = catalog.category("Animals")
    assert animals.words[0] == WordItem("Dog", "Barks", "easy")
    assert animals.question_pairs[0].liar_question == "Worst pet?"


def test_catalog_dict_round_trip(sample_catalog):
    assert Catalog.from_dict(sample_catalog.to_dict()) == sample_catalog


@pytest.mark.parametrize("document", [
    "not: [valid",
    "just a string",
    "categories: []",
    "categories: [{icon: x}]",
    "categories: [{name: A}, {name: A}]",
])
def test_parse_rejects_malformed_catalogs(document):
    with pytest.raises(CatalogError):
        parse_catalog(document)


def test_load_catalog_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(str(tmp_path / "missing.json"))


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"categories": [{"name": "Colors", "words": [{"word": "Red"}]}]}))

    catalog = load_catalog(str(path))

    assert catalog.category_names == ["Colors"]
    assert catalog.category("Colors").words[0].difficulty == "medium"


def test_builtin_catalog_loads():
    catalog = load_builtin_catalog()

    assert "Animals" in catalog.category_names
    for category in catalog.categories:
        assert category.words
        assert category.question_pairs


def test_fallback_to_builtin_catalog(tmp_path, capsys):
    """Test that a malformed catalog file falls back to the built-in one."""
    path = tmp_path / "broken.json"
    path.write_text("{ not json")

    catalog = load_catalog_or_default(str(path))

    assert catalog.category_names == load_builtin_catalog().category_names
    assert "Using built-in catalog" in capsys.readouterr().out
