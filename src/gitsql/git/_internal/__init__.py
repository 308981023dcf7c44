"""Internal components for git access - not part of public API."""

from gitsql.git._internal.access import RepoAccess
from gitsql.git._internal.parsing import (
    REFS_HEADS_PREFIX,
    REFS_REMOTES_PREFIX,
    REFS_TAGS_PREFIX,
    extract_branch_name,
    extract_remote_branch_name,
    extract_tag_name,
    strip_signature,
)

__all__ = [
    "REFS_HEADS_PREFIX",
    "REFS_REMOTES_PREFIX",
    "REFS_TAGS_PREFIX",
    "RepoAccess",
    "extract_branch_name",
    "extract_remote_branch_name",
    "extract_tag_name",
    "strip_signature",
]
