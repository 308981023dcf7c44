"""Ref catalog builder: branch rows and the startup walk's seeds."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import pygit2
import structlog

from gitsql.git import BranchRecord, ObjectReadError, RepoAccess, TraversalIOError
from gitsql.git._internal import (
    REFS_HEADS_PREFIX,
    REFS_REMOTES_PREFIX,
    extract_branch_name,
    extract_remote_branch_name,
)
from gitsql.git.models import BranchKind, utc_from_timestamp

logger = structlog.get_logger()

T = TypeVar("T", bound=pygit2.Object)

_CATEGORIES: tuple[tuple[str, BranchKind, Callable[[str], str | None]], ...] = (
    (REFS_HEADS_PREFIX, "local", extract_branch_name),
    (REFS_REMOTES_PREFIX, "remote", extract_remote_branch_name),
)


@dataclass(frozen=True, slots=True)
class RefCatalog:
    """Branch rows plus the distinct commit ids the startup walk starts from."""

    branches: tuple[BranchRecord, ...]
    seeds: tuple[str, ...]


class RefCatalogBuilder:
    """Enumerates local and remote-tracking branches.

    Symbolic remote refs such as ``origin/HEAD`` are rows of their own.
    Nothing is inserted into the commits relation here.
    """

    def __init__(self, access: RepoAccess, *, include_head: bool = True) -> None:
        self._access = access
        self._include_head = include_head

    def build(self) -> RefCatalog:
        branches: list[BranchRecord] = []
        seeds: dict[str, None] = {}

        for prefix, kind, extract in _CATEGORIES:
            for refname, ref in self._access.iter_references(prefix):
                record = self._branch_record(extract(refname) or refname, kind, ref)
                branches.append(record)
                if record.head_commit_id is not None:
                    seeds[record.head_commit_id] = None

        if self._include_head:
            head = self._access.head_commit_id()
            if head is not None:
                seeds[head] = None

        return RefCatalog(branches=tuple(branches), seeds=tuple(seeds))

    def _branch_record(self, name: str, kind: BranchKind, ref: pygit2.Reference) -> BranchRecord:
        target = self._access.reference_target(ref)
        commit_id = self._access.peel_to_commit_id(ref) if target is not None else None
        if commit_id is None:
            if target is not None:
                # Raises when the target object itself is missing
                self._read(target, self._access.read_object)
            logger.warning("branch_unresolved", branch=name, type=kind)
            return BranchRecord(name=name, kind=kind, head_commit_id=None, head_commit_date=None)

        commit = self._read(commit_id, self._access.read_commit)
        return BranchRecord(
            name=name,
            kind=kind,
            head_commit_id=commit_id,
            head_commit_date=utc_from_timestamp(commit.commit_time),
        )

    def _read(self, oid: str, reader: Callable[[str], T]) -> T:
        try:
            return reader(oid)
        except ObjectReadError as e:
            raise TraversalIOError(oid, e.reason, 0) from e
