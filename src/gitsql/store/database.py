"""In-memory relation store with a dedup index over commit ids.

This module provides:
- Database: a private in-memory SQLite database held on one connection
- RelationStore: sole writer of the commits, branches and tags relations

The store is single-writer and not thread-safe. Walks insert through
``insert_commit``; rows are buffered and written in bulk, and every walk
flushes on exit so a failed walk still keeps what it inserted (unless it
ran inside ``atomic()``).
"""

from __future__ import annotations

from collections.abc import Generator, Iterable
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import create_engine, delete, event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from gitsql.config.constants import INSERT_BATCH_SIZE
from gitsql.git.models import BranchRecord, TagRecord, format_timestamp
from gitsql.store.models import BranchRow, CommitRow, TagRow, relation_tables

if TYPE_CHECKING:
    from sqlalchemy import Connection, Engine

logger = structlog.get_logger()


class Database:
    """In-memory SQLite database pinned to a single connection.

    ``StaticPool`` keeps one DBAPI connection alive for the engine's
    lifetime; an in-memory database disappears with its connection.
    """

    def __init__(self, url: str = "sqlite://") -> None:
        self.url = url
        self.engine = self._create_engine()
        self.conn: Connection = self.engine.connect()

    def _create_engine(self) -> Engine:
        engine = create_engine(
            self.url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _configure_pragmas)
        return engine

    def create_all(self) -> None:
        """Create the relation tables."""
        SQLModel.metadata.create_all(self.conn, tables=relation_tables())
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()
        self.engine.dispose()


def _configure_pragmas(dbapi_conn: Any, _connection_record: Any) -> None:
    """Nothing is persisted, so durability pragmas are off."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA synchronous=OFF")
    cursor.execute("PRAGMA temp_store=MEMORY")
    cursor.close()


class RelationStore:
    """Owns the commits, branches and tags relations and the commit dedup index.

    The dedup index is the set of commit ids already materialized. Every
    walk (startup or ``traverse``) consults it through ``has_commit`` and
    ``insert_commit``, so a commit gets at most one row for the life of
    the store.
    """

    def __init__(self, database: Database | None = None, *, batch_size: int = INSERT_BATCH_SIZE):
        self._db = database or Database()
        self._db.create_all()
        self._batch_size = batch_size
        self._seen: set[str] = set()
        self._pending: list[dict[str, Any]] = []
        self._journal: list[str] | None = None

    @property
    def database(self) -> Database:
        return self._db

    # =========================================================================
    # Commits
    # =========================================================================

    def has_commit(self, commit_id: str) -> bool:
        return commit_id in self._seen

    @property
    def commit_count(self) -> int:
        return len(self._seen)

    def insert_commit(self, commit_id: str, author: str, date: datetime, message: str) -> bool:
        """Add a commit row. Returns False (and does nothing) if the id is present."""
        if commit_id in self._seen:
            return False
        self._seen.add(commit_id)
        if self._journal is not None:
            self._journal.append(commit_id)
        self._pending.append(
            {
                "id": commit_id,
                "author": author,
                "date": format_timestamp(date),
                "message": message,
            }
        )
        if len(self._pending) >= self._batch_size:
            self.flush()
        return True

    def flush(self) -> None:
        """Write buffered commit rows. Commits unless inside ``atomic()``."""
        if self._pending:
            table = CommitRow.__table__  # type: ignore[attr-defined]
            self._db.conn.execute(table.insert(), self._pending)
            self._pending = []
        if self._journal is None:
            self._db.conn.commit()

    @contextmanager
    def atomic(self) -> Generator[None, None, None]:
        """All-or-nothing commit inserts.

        On exception, rows inserted inside the block are rolled back and
        their ids leave the dedup index, then the exception propagates.
        """
        if self._journal is not None:
            raise RuntimeError("atomic() blocks do not nest")
        self.flush()
        journal: list[str] = []
        self._journal = journal
        try:
            yield
            self._journal = None
            self.flush()
        except BaseException:
            self._journal = None
            self._pending = []
            self._db.conn.rollback()
            self._seen.difference_update(journal)
            logger.debug("atomic_rollback", discarded=len(journal))
            raise

    # =========================================================================
    # Branches and Tags (wholesale replace)
    # =========================================================================

    def set_branches(self, rows: Iterable[BranchRecord]) -> int:
        return self._replace(BranchRow, [r.to_row() for r in rows])

    def set_tags(self, rows: Iterable[TagRecord]) -> int:
        return self._replace(TagRow, [r.to_row() for r in rows])

    def _replace(self, model_class: type[SQLModel], records: list[dict[str, Any]]) -> int:
        self.flush()
        conn = self._db.conn
        conn.execute(delete(model_class))
        if records:
            conn.execute(model_class.__table__.insert(), records)  # type: ignore[attr-defined]
        conn.commit()
        return len(records)

    # =========================================================================
    # Read View
    # =========================================================================

    @contextmanager
    def read_view(self, *, enforce: bool = True) -> Generator[Connection, None, None]:
        """Connection for executing user queries.

        With *enforce*, SQLite ``query_only`` is on for the duration so no
        statement can change the relations behind the dedup index, and any
        transaction the query opened is rolled back. Without it, changes are
        committed.
        """
        self.flush()
        conn = self._db.conn
        if enforce:
            conn.exec_driver_sql("PRAGMA query_only = ON")
        try:
            yield conn
        except BaseException:
            conn.rollback()
            raise
        else:
            if enforce:
                conn.rollback()
            else:
                conn.commit()
        finally:
            if enforce:
                conn.exec_driver_sql("PRAGMA query_only = OFF")
                conn.commit()

    def close(self) -> None:
        self._db.close()
