"""Commit graph walker: breadth-first closure over commit parents."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterable
from contextlib import nullcontext
from dataclasses import dataclass

import structlog

from gitsql.git import CommitRecord, ObjectReadError, RepoAccess, TraversalIOError
from gitsql.store import RelationStore

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class WalkStats:
    """Outcome of one walk."""

    seeds: int
    inserted: int
    elapsed: float


class CommitGraphWalker:
    """Inserts every commit reachable from a set of seeds exactly once.

    The store's dedup index doubles as the visited set, so walks started
    later (``traverse``) stop at history an earlier walk already
    materialized.
    """

    def __init__(self, access: RepoAccess, store: RelationStore, *, atomic: bool = False) -> None:
        self._access = access
        self._store = store
        self._atomic = atomic

    def walk(self, seeds: Iterable[str]) -> WalkStats:
        """Walk from *seeds* (full commit ids).

        Raises:
            TraversalIOError: A reachable commit could not be read. Rows
                inserted before the failure are kept unless the walker is
                atomic.
        """
        start = time.perf_counter()
        frontier = deque(dict.fromkeys(s for s in seeds if not self._store.has_commit(s)))
        queued = set(frontier)
        seed_count = len(frontier)
        inserted = 0

        logger.debug("walk_start", seeds=seed_count, atomic=self._atomic)

        guard = self._store.atomic() if self._atomic else nullcontext()
        try:
            with guard:
                while frontier:
                    oid = frontier.popleft()
                    if self._store.has_commit(oid):
                        continue
                    try:
                        commit = self._access.read_commit(oid)
                    except ObjectReadError as e:
                        retained = 0 if self._atomic else inserted
                        logger.warning(
                            "walk_aborted",
                            oid=oid,
                            reason=e.reason,
                            inserted=inserted,
                            retained=retained,
                        )
                        raise TraversalIOError(oid, e.reason, retained) from e

                    record = CommitRecord.from_pygit2(commit)
                    if self._store.insert_commit(
                        record.id, record.author, record.date, record.message
                    ):
                        inserted += 1

                    for parent_id in commit.parent_ids:
                        parent = str(parent_id)
                        if parent not in queued and not self._store.has_commit(parent):
                            queued.add(parent)
                            frontier.append(parent)
        finally:
            self._store.flush()

        elapsed = time.perf_counter() - start
        logger.debug(
            "walk_complete", seeds=seed_count, inserted=inserted, elapsed=round(elapsed, 3)
        )
        return WalkStats(seeds=seed_count, inserted=inserted, elapsed=elapsed)
