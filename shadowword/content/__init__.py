"""
Game content: categories, words, question pairs and catalog loading.
"""

from .catalog import Catalog, Category, WordItem, QuestionPair, RoundContent
from .loader import load_catalog, load_builtin_catalog, load_catalog_or_default, parse_catalog

__all__ = [
    'Catalog',
    'Category',
    'WordItem',
    'QuestionPair',
    'RoundContent',
    'load_catalog',
    'load_builtin_catalog',
    'load_catalog_or_default',
    'parse_catalog',
]
