"""Relation store: the commits, branches and tags tables and the query bridge."""

from gitsql.store.database import Database, RelationStore
from gitsql.store.errors import QueryError, QueryExecutionError, QuerySyntaxError
from gitsql.store.query import QueryBridge, ResultSet

__all__ = [
    "Database",
    "RelationStore",
    "QueryBridge",
    "ResultSet",
    "QueryError",
    "QuerySyntaxError",
    "QueryExecutionError",
]
