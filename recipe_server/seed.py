import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import structlog

from . import engine, schemas
from .store import RecordStore

logger = structlog.get_logger(__name__)


def load_recipes(path) -> List[Dict[str, Any]]:
    """Load recipes from a JSON file and return a list of dicts.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        list: list of recipe dictionaries, empty if the file is missing.
    """
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def import_recipes(store: RecordStore, records: Iterable[Dict[str, Any]]) -> int:
    """Create every named recipe whose name is not stored yet."""
    added = 0
    for r in records:
        name = r.get("name")
        if not name:
            continue
        if engine.recipe_name_exists(store, name):
            continue
        recipe = schemas.RecipeCreate(
            name=name,
            description=r.get("description", ""),
            photo=r.get("photo", ""),
        )
        engine.create_recipe(store, recipe)
        added += 1
    logger.info("Recipes imported", added=added)
    return added
