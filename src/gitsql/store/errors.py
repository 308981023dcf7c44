"""Query bridge error types."""


class QueryError(Exception):
    """Base error for user queries. Never fatal; the store stays queryable."""

    def __init__(self, sql: str, message: str) -> None:
        super().__init__(message)
        self.sql = sql
        self.message = message


class QuerySyntaxError(QueryError):
    """The statement could not be parsed."""

    pass


class QueryExecutionError(QueryError):
    """The statement parsed but failed (unknown table, write attempt, ...)."""

    pass
