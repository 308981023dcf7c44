"""Git access module: pygit2-backed object store reads and relation records."""

from gitsql.git._internal import RepoAccess
from gitsql.git.errors import (
    AmbiguousCommitError,
    CommitNotFoundError,
    CommitResolutionError,
    GitError,
    NotARepositoryError,
    ObjectReadError,
    TagChainExceededError,
    TagResolutionError,
    TraversalIOError,
)
from gitsql.git.models import BranchRecord, CommitRecord, TagRecord

__all__ = [
    # Access
    "RepoAccess",
    # Records
    "CommitRecord",
    "BranchRecord",
    "TagRecord",
    # Errors
    "GitError",
    "NotARepositoryError",
    "ObjectReadError",
    "TraversalIOError",
    "CommitResolutionError",
    "CommitNotFoundError",
    "AmbiguousCommitError",
    "TagResolutionError",
    "TagChainExceededError",
]
