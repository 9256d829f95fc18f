"""
Record store backed by a SQLAlchemy engine.

The engine's pool hands out connections; every ``connection()`` scope is a
single transaction that commits on success, rolls back on error and always
returns the connection to the pool.
"""

import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

import structlog
from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import StoreError
from .statements import Statement

logger = structlog.get_logger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


@dataclass
class StoreResult:
    rows: List[Dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0


def to_bound(statement: Statement):
    """Rewrite ``$n`` placeholders into named binds ``:pn`` with their values."""
    sql = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", statement.text)
    params = {f"p{i}": value for i, value in enumerate(statement.params, start=1)}
    return text(sql), params


class StoreConnection:
    def __init__(self, conn: Connection):
        self._conn = conn

    def execute(self, statement: Statement) -> StoreResult:
        clause, params = to_bound(statement)
        result = self._conn.execute(clause, params)
        rows = [dict(r._mapping) for r in result] if result.returns_rows else []
        return StoreResult(rows=rows, rowcount=result.rowcount)


class RecordStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def connection(self) -> Iterator[StoreConnection]:
        try:
            with self.engine.begin() as conn:
                yield StoreConnection(conn)
        except SQLAlchemyError as exc:
            logger.error("Store error", error=exc.__class__.__name__)
            raise StoreError("The record store failed to execute a statement") from exc
