"""
Catalog loading from JSON or YAML documents, with a built-in fallback.
"""

import yaml
from importlib import resources
from pathlib import Path
from typing import Optional

from .catalog import Catalog
from ..core.exceptions import CatalogError


BUILTIN_CATALOG = "catalog.yaml"


def parse_catalog(text: str, source: str = "<string>") -> Catalog:
    """
    Parse a catalog document. YAML is a superset of JSON, so both work.

    Raises:
        CatalogError: If the document is not valid or has no categories
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(source, f"invalid document: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("categories"), list):
        raise CatalogError(source, "expected a mapping with a 'categories' list")

    try:
        catalog = Catalog.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise CatalogError(source, f"malformed category: {e!r}") from e

    if not catalog.categories:
        raise CatalogError(source, "catalog has no categories")

    names = catalog.category_names
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise CatalogError(source, f"duplicate category names: {duplicates}")

    return catalog


def load_catalog(path: str) -> Catalog:
    """
    Load a catalog from a file.

    Raises:
        CatalogError: If the file is missing, unreadable or malformed
    """
    catalog_file = Path(path)
    if not catalog_file.exists():
        raise CatalogError(path, "file not found")
    try:
        text = catalog_file.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(path, f"could not read file: {e}") from e
    return parse_catalog(text, source=path)


def load_builtin_catalog() -> Catalog:
    """Load the catalog shipped with the package."""
    text = resources.files("shadowword.content").joinpath("data").joinpath(BUILTIN_CATALOG).read_text(encoding="utf-8")
    return parse_catalog(text, source=BUILTIN_CATALOG)


def load_catalog_or_default(path: Optional[str] = None) -> Catalog:
    """Load a catalog from path, falling back to the built-in catalog."""
    if path is None:
        return load_builtin_catalog()
    try:
        return load_catalog(path)
    except CatalogError as e:
        print(f"Warning: {e}. Using built-in catalog.")
        return load_builtin_catalog()
