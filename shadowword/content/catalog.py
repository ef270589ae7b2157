"""
Content catalog: categories of words and question pairs.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Iterable, Tuple

from ..config.game_config import Difficulty, GameMode, GameSettings


@dataclass(frozen=True)
class WordItem:
    """A secret word with a hint the liar may be shown."""
    word: str
    hint: str = ""
    difficulty: str = "medium"

    @property
    def difficulty_level(self) -> Difficulty:
        return Difficulty.parse(self.difficulty)


@dataclass(frozen=True)
class QuestionPair:
    """A question for the group and a similar one for the liar."""
    main_question: str
    liar_question: str
    difficulty: str = "medium"

    @property
    def difficulty_level(self) -> Difficulty:
        return Difficulty.parse(self.difficulty)


@dataclass(frozen=True)
class Category:
    """A named group of words and question pairs."""
    name: str
    icon: str = ""
    words: Tuple[WordItem, ...] = ()
    question_pairs: Tuple[QuestionPair, ...] = ()

    def words_for(self, difficulty: Difficulty) -> List[WordItem]:
        """Words at this difficulty or easier."""
        allowed = difficulty.allowed_tiers()
        return [w for w in self.words if w.difficulty_level in allowed]

    def questions_for(self, difficulty: Difficulty) -> List[QuestionPair]:
        """Question pairs at this difficulty or easier."""
        allowed = difficulty.allowed_tiers()
        return [q for q in self.question_pairs if q.difficulty_level in allowed]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        """Build a category from its JSON-shaped dict."""
        words = tuple(
            WordItem(
                word=str(w["word"]),
                hint=str(w.get("hint") or ""),
                difficulty=str(w.get("difficulty") or "medium"),
            )
            for w in data.get("words") or []
        )
        pairs = tuple(
            QuestionPair(
                main_question=str(q["mainQuestion"]),
                liar_question=str(q["liarQuestion"]),
                difficulty=str(q.get("difficulty") or "medium"),
            )
            for q in data.get("questionPairs") or []
        )
        return cls(name=str(data["name"]), icon=str(data.get("icon") or ""),
                   words=words, question_pairs=pairs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "icon": self.icon,
            "words": [
                {"word": w.word, "hint": w.hint, "difficulty": w.difficulty}
                for w in self.words
            ],
            "questionPairs": [
                {"mainQuestion": q.main_question, "liarQuestion": q.liar_question,
                 "difficulty": q.difficulty}
                for q in self.question_pairs
            ],
        }


@dataclass(frozen=True)
class RoundContent:
    """Content chosen for a round: a word in word mode, a question pair in question mode."""
    category: Category
    word: Optional[WordItem] = None
    question_pair: Optional[QuestionPair] = None

    def __post_init__(self):
        if (self.word is None) == (self.question_pair is None):
            raise ValueError("RoundContent needs exactly one of word or question_pair")

    @property
    def secret_word(self) -> str:
        return self.word.word if self.word else ""

    @property
    def hint(self) -> str:
        return self.word.hint if self.word else ""

    @property
    def main_question(self) -> str:
        return self.question_pair.main_question if self.question_pair else ""

    @property
    def liar_question(self) -> str:
        return self.question_pair.liar_question if self.question_pair else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.name,
            "icon": self.category.icon,
            "word": self.secret_word or None,
            "hint": self.hint or None,
            "main_question": self.main_question or None,
            "liar_question": self.liar_question or None,
        }


@dataclass
class Catalog:
    """All categories available to the game."""
    categories: List[Category] = field(default_factory=list)

    @property
    def category_names(self) -> List[str]:
        return [c.name for c in self.categories]

    def category(self, name: str) -> Optional[Category]:
        """Get category by name."""
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def categories_named(self, names: Iterable[str]) -> List[Category]:
        """Categories whose name is in names, or every category if names is empty."""
        names = set(names)
        if not names:
            return list(self.categories)
        return [c for c in self.categories if c.name in names]

    def select_content(self, settings: GameSettings, rng: Optional[random.Random] = None) -> Optional[RoundContent]:
        """
        Pick a random category, then a random item from it.

        The category is drawn from the selected categories (all if none are
        selected) and the item from that category's words or question pairs
        at the settings' difficulty. Returns None when nothing survives the
        filters.
        """
        rng = rng or random.Random()
        candidates = self.categories_named(settings.selected_categories)
        if not candidates:
            return None
        category = rng.choice(candidates)

        if settings.game_mode == GameMode.WORD:
            words = category.words_for(settings.difficulty)
            if not words:
                return None
            return RoundContent(category=category, word=rng.choice(words))

        pairs = category.questions_for(settings.difficulty)
        if not pairs:
            return None
        return RoundContent(category=category, question_pair=rng.choice(pairs))

    def get_all_words(self, category_names: Iterable[str]) -> List[WordItem]:
        """Every word in the given categories (all categories if empty)."""
        return [w for c in self.categories_named(category_names) for w in c.words]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Catalog":
        return cls(categories=[Category.from_dict(c) for c in data.get("categories") or []])

    def to_dict(self) -> Dict[str, Any]:
        return {"categories": [c.to_dict() for c in self.categories]}
