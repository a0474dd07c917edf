"""Default category set loading."""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from ingestion.categories import items_to_categories
from ingestion.errors import FormatError
from logger import get_logger
from models.category import Category

logger = get_logger()

DEFAULT_CATEGORIES_FILE = Path(__file__).parent / "categories.yaml"

_cache: Dict[Path, List[Dict[str, Any]]] = {}


def load_category_data(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Load raw category entries from a YAML file.

    Args:
        path: YAML file to read. Defaults to the packaged categories.yaml.

    Returns:
        List of category mappings, in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FormatError: If the YAML root is not a list.
    """
    path = path or DEFAULT_CATEGORIES_FILE

    if path in _cache:
        return _cache[path]

    if not path.exists():
        raise FileNotFoundError(f"Categories file not found: {path}")

    logger.info(f"Loading default categories from {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, list):
        raise FormatError(f"Categories file must contain a list: {path}")

    _cache[path] = data
    return data


def load_default_categories(path: Optional[Path] = None) -> List[Category]:
    """Build a fresh list of Category objects from the default set.

    Each call returns new objects, so callers may modify them freely.
    """
    return items_to_categories(load_category_data(path))
