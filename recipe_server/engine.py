"""
Recipe reconciliation: turns create/replace/patch/delete requests into
statements against the record store and reports what actually happened.
"""

from typing import Any, Dict, List, Mapping

import structlog

from . import outcomes, schemas, statements
from .store import RecordStore

logger = structlog.get_logger(__name__)


def get_recipes(store: RecordStore) -> List[Dict[str, Any]]:
    with store.connection() as conn:
        return conn.execute(statements.build_select_all()).rows


def get_recipe(store: RecordStore, recipe_id: int) -> outcomes.Outcome:
    with store.connection() as conn:
        rows = conn.execute(statements.build_select_one(recipe_id)).rows
    if not rows:
        return outcomes.NotFound(recipe_id)
    return outcomes.Found(rows[0])


def create_recipe(store: RecordStore, recipe: schemas.RecipeCreate) -> outcomes.Created:
    stmt = statements.build_insert(recipe.name, recipe.description, recipe.photo)
    with store.connection() as conn:
        new_id = conn.execute(stmt).rows[0]["id"]
    logger.info("Recipe inserted", recipe_id=new_id)
    return outcomes.Created(new_id)


def replace_recipe(
    store: RecordStore, recipe_id: int, recipe: schemas.RecipeCreate
) -> outcomes.Outcome:
    """Full replace; inserts a new row when ``recipe_id`` does not exist.

    The fallback row gets a store-assigned id, never ``recipe_id``.
    """
    update = statements.build_replace(
        recipe_id, recipe.name, recipe.description, recipe.photo
    )
    insert = statements.build_insert(recipe.name, recipe.description, recipe.photo)
    with store.connection() as conn:
        if conn.execute(update).rowcount > 0:
            logger.info("Recipe updated", recipe_id=recipe_id)
            return outcomes.Updated(recipe_id)
        new_id = conn.execute(insert).rows[0]["id"]
    logger.info("Recipe not found, inserted instead", requested_id=recipe_id, recipe_id=new_id)
    return outcomes.CreatedFallback(new_id, recipe_id)


def patch_recipe(
    store: RecordStore, recipe_id: int, fields: Mapping[str, Any]
) -> outcomes.Outcome:
    """Update only the given fields. A missing row is reported, never created."""
    stmt = statements.build_patch(recipe_id, fields)
    with store.connection() as conn:
        affected = conn.execute(stmt).rowcount
    if affected == 0:
        logger.info("Recipe to patch not found", recipe_id=recipe_id)
        return outcomes.NotFound(recipe_id)
    logger.info("Recipe patched", recipe_id=recipe_id, fields=list(fields))
    return outcomes.Updated(recipe_id)


def delete_recipe(store: RecordStore, recipe_id: int) -> outcomes.Outcome:
    with store.connection() as conn:
        affected = conn.execute(statements.build_delete(recipe_id)).rowcount
    if affected == 0:
        logger.info("Recipe to delete not found", recipe_id=recipe_id)
        return outcomes.NotFound(recipe_id)
    logger.info("Recipe deleted", recipe_id=recipe_id)
    return outcomes.Deleted(recipe_id)


def recipe_name_exists(store: RecordStore, name: str) -> bool:
    with store.connection() as conn:
        return bool(conn.execute(statements.build_select_by_name(name)).rows)
