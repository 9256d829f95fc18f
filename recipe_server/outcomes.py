"""
Reconciliation outcomes.

Each engine operation returns exactly one of these; the HTTP layer maps the
variant to a status code.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Created:
    id: int


@dataclass(frozen=True)
class Updated:
    id: int


@dataclass(frozen=True)
class CreatedFallback:
    """A full replace found no row and inserted a new one instead."""

    id: int
    requested_id: int


@dataclass(frozen=True)
class Deleted:
    id: int


@dataclass(frozen=True)
class Found:
    record: Dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    id: int


Outcome = Union[Created, Updated, CreatedFallback, Deleted, Found, NotFound]
