"""Traversal extender: the ``traverse`` command."""

from __future__ import annotations

import structlog

from gitsql.config.constants import SHORT_ID_LENGTH
from gitsql.git import RepoAccess
from gitsql.ingest.walker import CommitGraphWalker

logger = structlog.get_logger()


class TraversalExtender:
    """Grows the commits relation from a user-supplied commit.

    Shares the walker (and so the dedup index) with startup ingestion.
    Branches and tags are never touched.
    """

    def __init__(self, access: RepoAccess, walker: CommitGraphWalker) -> None:
        self._access = access
        self._walker = walker

    def traverse(self, commit_id: str) -> int:
        """Insert the history reachable from *commit_id*; return rows inserted.

        Raises:
            CommitNotFoundError: Nothing matches, or the match is not a commit.
            AmbiguousCommitError: The prefix matches several objects.
            TraversalIOError: A reachable commit could not be read.
        """
        resolved = self._access.resolve_commit(commit_id)
        logger.info("traverse_resolved", spec=commit_id, commit=resolved[:SHORT_ID_LENGTH])
        return self._walker.walk([resolved]).inserted
