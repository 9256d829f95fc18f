import itertools
import re

import pytest

from recipe_server.exceptions import InvalidField, InvalidIntent
from recipe_server.statements import (
    MUTABLE_FIELDS,
    build_delete,
    build_insert,
    build_patch,
)

VALUES = {
    "name": "Robert'); DROP TABLE recipes; --",
    "description": "50% less $1 sugar",
    "photo": "data:image/png;base64,iVBORw0KGgo=",
}

SUBSETS = [
    combo
    for size in range(1, len(MUTABLE_FIELDS) + 1)
    for combo in itertools.permutations(MUTABLE_FIELDS, size)
]


@pytest.mark.parametrize("fields", SUBSETS, ids="-".join)
def test_patch_params_follow_field_order_with_id_last(fields):
    stmt = build_patch(7, {f: VALUES[f] for f in fields})

    assert len(stmt.params) == len(fields) + 1
    assert stmt.params[-1] == 7
    assert stmt.params[:-1] == tuple(VALUES[f] for f in fields)

    expected_set = ", ".join(f"{f} = ${i}" for i, f in enumerate(fields, start=1))
    assert stmt.text == f"UPDATE recipes SET {expected_set} WHERE id = ${len(fields) + 1}"


@pytest.mark.parametrize("fields", SUBSETS, ids="-".join)
def test_patch_text_never_contains_values(fields):
    stmt = build_patch(123456, {f: VALUES[f] for f in fields})

    for f in fields:
        assert VALUES[f] not in stmt.text
    assert "123456" not in stmt.text
    # nothing but identifiers, placeholders and SQL keywords
    assert re.fullmatch(r"[A-Za-z_ ,=$0-9]+", stmt.text)


def test_patch_placeholders_are_distinct_for_equal_values():
    stmt = build_patch(1, {"name": "same", "description": "same"})
    assert stmt.text == "UPDATE recipes SET name = $1, description = $2 WHERE id = $3"
    assert stmt.params == ("same", "same", 1)


def test_patch_empty_intent():
    with pytest.raises(InvalidIntent):
        build_patch(1, {})


def test_patch_unknown_field():
    with pytest.raises(InvalidField) as excinfo:
        build_patch(1, {"name": "ok", "id": 3, "owner": "bob"})
    assert excinfo.value.fields == ["id", "owner"]


def test_patch_unknown_field_is_also_an_invalid_intent():
    with pytest.raises(InvalidIntent):
        build_patch(1, {"name; DROP TABLE recipes": "x"})


def test_insert_and_delete_are_positional():
    ins = build_insert("Toast", "Simple", "")
    assert ins.text == "INSERT INTO recipes (name, description, photo) VALUES ($1, $2, $3) RETURNING id"
    assert ins.params == ("Toast", "Simple", "")

    dl = build_delete(5)
    assert dl.text == "DELETE FROM recipes WHERE id = $1"
    assert dl.params == (5,)
