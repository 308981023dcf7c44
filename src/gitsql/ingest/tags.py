"""Tag resolver: one row per tag ref, annotated chains dereferenced."""

from __future__ import annotations

from dataclasses import dataclass

import pygit2
import structlog

from gitsql.config.constants import DEFAULT_MAX_TAG_CHAIN
from gitsql.git import (
    ObjectReadError,
    RepoAccess,
    TagChainExceededError,
    TagRecord,
    TagResolutionError,
)
from gitsql.git._internal import REFS_TAGS_PREFIX, extract_tag_name
from gitsql.git.models import ObjectKind

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class SkippedTag:
    name: str
    reason: str


@dataclass(frozen=True, slots=True)
class TagResolution:
    tags: tuple[TagRecord, ...]
    skipped: tuple[SkippedTag, ...]


class TagResolver:
    """Resolves every tag ref to its final non-tag object.

    A tag that cannot be resolved (unreadable object, chain longer than
    ``max_chain`` hops) is skipped and reported; the others still resolve.
    """

    def __init__(self, access: RepoAccess, *, max_chain: int = DEFAULT_MAX_TAG_CHAIN) -> None:
        self._access = access
        self._max_chain = max_chain

    def resolve(self) -> TagResolution:
        tags: list[TagRecord] = []
        skipped: list[SkippedTag] = []
        for refname, ref in self._access.iter_references(REFS_TAGS_PREFIX):
            name = extract_tag_name(refname) or refname
            try:
                tags.append(self.resolve_ref(name, ref))
            except TagResolutionError as e:
                logger.warning("tag_skipped", tag=name, reason=str(e))
                skipped.append(SkippedTag(name=name, reason=str(e)))
        return TagResolution(tags=tuple(tags), skipped=tuple(skipped))

    def resolve_ref(self, name: str, ref: pygit2.Reference) -> TagRecord:
        target_id = self._access.reference_target(ref)
        if target_id is None:
            raise TagResolutionError(name, f"Tag {name!r} does not point at an object")

        obj = self._read(name, target_id)
        if not isinstance(obj, pygit2.Tag):
            return TagRecord.lightweight(name, target_id, obj.type_str)

        final_id, final_type = self._dereference(name, obj)
        return TagRecord.annotated(name, obj, final_id, final_type)

    def _dereference(self, name: str, tag: pygit2.Tag) -> tuple[str, ObjectKind]:
        current = tag
        for _ in range(self._max_chain):
            target_id = str(current.target)
            obj = self._read(name, target_id)
            if not isinstance(obj, pygit2.Tag):
                return target_id, obj.type_str
            current = obj
        raise TagChainExceededError(name, self._max_chain)

    def _read(self, name: str, oid: str) -> pygit2.Object:
        try:
            return self._access.read_object(oid)
        except ObjectReadError as e:
            raise TagResolutionError(name, f"Tag {name!r}: {e}") from e
