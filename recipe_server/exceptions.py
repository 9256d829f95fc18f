"""Error kinds raised by the reconciliation engine and its store."""

from typing import Iterable


class RecipeError(Exception):
    """Base class for recipe server errors."""


class InvalidIntent(RecipeError):
    """An update intent that cannot be turned into a statement."""


class InvalidField(InvalidIntent):
    """An update intent naming fields outside the mutable allow-list."""

    def __init__(self, fields: Iterable[str]):
        self.fields = sorted(fields)
        super().__init__(f"Unknown recipe field(s): {', '.join(self.fields)}")


class StoreError(RecipeError):
    """The datastore failed to run a statement."""
