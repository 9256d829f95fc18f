"""
Statement construction for the recipes table.

Statements use PostgreSQL-style positional placeholders (``$1``, ``$2``, ...)
and carry their values separately in ``params``. Values are never written
into the statement text; only table and column identifiers from the fixed
allow-list below are.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

from .exceptions import InvalidField, InvalidIntent
from .models import Recipe

TABLE = Recipe.__tablename__


class MutableField(str, Enum):
    NAME = "name"
    DESCRIPTION = "description"
    PHOTO = "photo"


MUTABLE_FIELDS = tuple(f.value for f in MutableField)


@dataclass(frozen=True)
class Statement:
    text: str
    params: Tuple[Any, ...] = ()


def check_fields(fields: Mapping[str, Any]) -> None:
    """Raise InvalidField if any key is not a mutable recipe field."""
    unknown = [k for k in fields if k not in MUTABLE_FIELDS]
    if unknown:
        raise InvalidField(unknown)


def build_patch(recipe_id: int, fields: Mapping[str, Any], table: str = TABLE) -> Statement:
    """Build ``UPDATE <table> SET f1 = $1, ... WHERE id = $n+1``.

    SET order is the mapping's iteration order; each placeholder index is the
    field's position in that order, and the id is always the last parameter.
    """
    check_fields(fields)
    if not fields:
        raise InvalidIntent("A partial update needs at least one field")

    names = list(fields)
    assignments = ", ".join(f"{name} = ${i}" for i, name in enumerate(names, start=1))
    text = f"UPDATE {table} SET {assignments} WHERE id = ${len(names) + 1}"
    params = tuple(fields[name] for name in names) + (recipe_id,)
    return Statement(text, params)


def build_replace(recipe_id: int, name: str, description: str, photo: str) -> Statement:
    return build_patch(
        recipe_id, {"name": name, "description": description, "photo": photo}
    )


def build_insert(name: str, description: str, photo: str) -> Statement:
    return Statement(
        f"INSERT INTO {TABLE} (name, description, photo) VALUES ($1, $2, $3) RETURNING id",
        (name, description, photo),
    )


def build_select_all() -> Statement:
    return Statement(f"SELECT id, name, description, photo FROM {TABLE} ORDER BY id")


def build_select_one(recipe_id: int) -> Statement:
    return Statement(
        f"SELECT id, name, description, photo FROM {TABLE} WHERE id = $1",
        (recipe_id,),
    )


def build_select_by_name(name: str) -> Statement:
    return Statement(f"SELECT id FROM {TABLE} WHERE name = $1", (name,))


def build_delete(recipe_id: int) -> Statement:
    return Statement(f"DELETE FROM {TABLE} WHERE id = $1", (recipe_id,))
