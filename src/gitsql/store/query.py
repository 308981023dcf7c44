"""Query bridge: runs user SQL against the relation store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.exc import DBAPIError

from gitsql.store.database import RelationStore
from gitsql.store.errors import QueryError, QueryExecutionError, QuerySyntaxError

logger = structlog.get_logger()

# Fragments of sqlite3 error text that mean the statement did not parse
_SYNTAX_MARKERS = ("syntax error", "incomplete input", "unrecognized token")


@dataclass(frozen=True, slots=True)
class ResultSet:
    """Column names and row values of one executed statement."""

    columns: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def keys(self) -> tuple[str, ...]:
        """Column names made unique: a repeated name gets ``_2``, ``_3``, ...

        A generated name never shadows a real column, wherever it appears.
        """
        taken = set(self.columns)
        used: set[str] = set()
        next_suffix: dict[str, int] = {}
        keys: list[str] = []
        for name in self.columns:
            key = name
            if name in used:
                suffix = next_suffix.get(name, 2)
                while (key := f"{name}_{suffix}") in taken:
                    suffix += 1
                next_suffix[name] = suffix + 1
                taken.add(key)
            used.add(key)
            keys.append(key)
        return tuple(keys)

    def as_dicts(self) -> list[dict[str, Any]]:
        """One mapping per row, keyed by :attr:`keys` so no value is dropped."""
        keys = self.keys
        return [dict(zip(keys, row, strict=True)) for row in self.rows]


class QueryBridge:
    """Executes one SQL statement at a time over the store's connection.

    Failures raise ``QueryError`` subclasses and leave the store usable.
    """

    def __init__(self, store: RelationStore, *, read_only: bool = True) -> None:
        self._store = store
        self._read_only = read_only

    @property
    def read_only(self) -> bool:
        return self._read_only

    def run_query(self, sql: str) -> ResultSet:
        if not sql.strip():
            raise QuerySyntaxError(sql, "empty statement")

        try:
            with self._store.read_view(enforce=self._read_only) as conn:
                result = conn.exec_driver_sql(sql)
                if not result.returns_rows:
                    return ResultSet(columns=(), rows=())
                columns = tuple(result.keys())
                rows = tuple(tuple(row) for row in result.fetchall())
        except DBAPIError as e:
            error = _classify(sql, e)
            logger.info("query_failed", kind=type(error).__name__, error=error.message)
            raise error from e

        return ResultSet(columns=columns, rows=rows)


def _classify(sql: str, error: DBAPIError) -> QueryError:
    message = str(error.orig) if error.orig is not None else str(error)
    lowered = message.lower()
    if any(marker in lowered for marker in _SYNTAX_MARKERS):
        return QuerySyntaxError(sql, message)
    return QueryExecutionError(sql, message)
