"""RepoSession: startup ingestion plus the two interactive operations."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

import structlog

from gitsql.config import GitSqlConfig
from gitsql.git import RepoAccess
from gitsql.ingest import (
    CommitGraphWalker,
    RefCatalogBuilder,
    SkippedTag,
    TagResolver,
    TraversalExtender,
)
from gitsql.store import QueryBridge, RelationStore, ResultSet

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class IngestReport:
    """What startup ingestion produced."""

    commit_count: int
    branch_count: int
    tag_count: int
    skipped_tags: tuple[SkippedTag, ...]
    elapsed: float


class RepoSession:
    """One repository projected into the commits, branches and tags relations.

    Build with :meth:`open`; the constructor only wires components.
    """

    def __init__(
        self,
        access: RepoAccess,
        store: RelationStore,
        config: GitSqlConfig,
    ) -> None:
        self.access = access
        self.store = store
        self.config = config
        self.walker = CommitGraphWalker(access, store, atomic=config.traversal.atomic)
        self.extender = TraversalExtender(access, self.walker)
        self.bridge = QueryBridge(store, read_only=config.query.read_only)
        self.report: IngestReport | None = None

    @classmethod
    def open(cls, path: Path | str, config: GitSqlConfig | None = None) -> RepoSession:
        """Open the repository at (or above) *path* and ingest it.

        Raises:
            NotARepositoryError: No repository found.
            TraversalIOError: A branch head or its history could not be read.
        """
        config = config or GitSqlConfig()
        session = cls(RepoAccess(path), RelationStore(), config)
        try:
            session.report = session._ingest()
        except BaseException:
            session.close()
            raise
        return session

    def _ingest(self) -> IngestReport:
        start = time.perf_counter()

        catalog = RefCatalogBuilder(
            self.access, include_head=self.config.traversal.include_head
        ).build()
        self.walker.walk(catalog.seeds)
        resolution = TagResolver(
            self.access, max_chain=self.config.traversal.max_tag_chain
        ).resolve()

        branch_count = self.store.set_branches(catalog.branches)
        tag_count = self.store.set_tags(resolution.tags)

        report = IngestReport(
            commit_count=self.store.commit_count,
            branch_count=branch_count,
            tag_count=tag_count,
            skipped_tags=resolution.skipped,
            elapsed=time.perf_counter() - start,
        )
        logger.info(
            "ingest_complete",
            repo=str(self.access.path),
            commits=report.commit_count,
            branches=report.branch_count,
            tags=report.tag_count,
            skipped_tags=len(report.skipped_tags),
            elapsed=round(report.elapsed, 3),
        )
        return report

    def traverse(self, commit_id: str) -> int:
        """Insert history reachable from *commit_id*; returns rows inserted."""
        return self.extender.traverse(commit_id)

    def run_query(self, sql: str) -> ResultSet:
        return self.bridge.run_query(sql)

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> RepoSession:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
