"""Repository access layer - owns pygit2.Repository and exposes read-only facts."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pygit2

from gitsql.config.constants import MIN_PREFIX_LENGTH
from gitsql.git._internal.errors import object_read
from gitsql.git._internal.parsing import is_hex
from gitsql.git.errors import (
    AmbiguousCommitError,
    CommitNotFoundError,
    NotARepositoryError,
    ObjectReadError,
)

_FULL_HEX_LENGTH = 40


class RepoAccess:
    """Owns pygit2.Repository and provides normalized read access to objects and refs."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            discovered = pygit2.discover_repository(str(self._path))
            if discovered is None:
                raise NotARepositoryError(str(self._path))
            self._repo = pygit2.Repository(discovered)
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @property
    def path(self) -> Path:
        """Working directory, or the git directory for bare repositories."""
        return Path(self._repo.workdir or self._repo.path)

    @property
    def is_unborn(self) -> bool:
        return self._repo.head_is_unborn

    # =========================================================================
    # Ref Enumeration
    # =========================================================================

    def iter_references(self, prefix: str) -> Iterator[tuple[str, pygit2.Reference]]:
        """Yield (refname, reference) for refs under *prefix*, sorted by name."""
        for refname in sorted(self._repo.references):
            if refname.startswith(prefix):
                yield refname, self._repo.references[refname]

    def reference_target(self, ref: pygit2.Reference) -> str | None:
        """Direct target id of *ref*, following symbolic refs. None if it dangles."""
        try:
            return str(ref.resolve().target)
        except (pygit2.GitError, KeyError):
            return None

    def peel_to_commit_id(self, ref: pygit2.Reference) -> str | None:
        """Commit id *ref* ultimately points at, or None if there is none."""
        try:
            commit = ref.peel(pygit2.Commit)
        except (pygit2.GitError, KeyError, ValueError):
            return None
        return str(commit.id)

    def head_commit_id(self) -> str | None:
        """Commit id HEAD resolves to, or None for an unborn or broken HEAD."""
        if self.is_unborn:
            return None
        try:
            return self.peel_to_commit_id(self._repo.head)
        except pygit2.GitError:
            return None

    # =========================================================================
    # Object Reads
    # =========================================================================

    def read_object(self, oid: str) -> pygit2.Object:
        """Read any object by full hex id."""
        with object_read(oid):
            obj = self._repo.get(oid)
        if obj is None:
            raise ObjectReadError(oid, "object not found")
        return obj

    def read_commit(self, oid: str) -> pygit2.Commit:
        obj = self.read_object(oid)
        if not isinstance(obj, pygit2.Commit):
            raise ObjectReadError(oid, f"expected commit, found {obj.type_str}")
        return obj

    # =========================================================================
    # Commit Resolution
    # =========================================================================

    def resolve_commit(self, spec: str) -> str:
        """Resolve a full id, unique id prefix, or revision name to a commit id.

        Raises:
            CommitNotFoundError: nothing matches, or the match is not a commit.
            AmbiguousCommitError: the prefix matches more than one object.
        """
        spec = spec.strip()
        if not spec:
            raise CommitNotFoundError(spec, "empty identifier")

        if is_hex(spec) and len(spec) <= _FULL_HEX_LENGTH:
            if len(spec) < MIN_PREFIX_LENGTH:
                # Too short to look up as an id; still valid as a ref name ("abc", "dad")
                named = self._revparse(spec)
                if named is not None:
                    return self._peel_commit_id(spec, named)
                raise AmbiguousCommitError(
                    spec, f"prefixes need at least {MIN_PREFIX_LENGTH} characters"
                )
            try:
                obj = self._repo.get(spec.lower())
            except ValueError as e:
                # libgit2 reports multiple prefix matches as GIT_EAMBIGUOUS
                raise AmbiguousCommitError(spec, str(e)) from e
            except pygit2.GitError as e:
                raise ObjectReadError(spec, str(e)) from e
            if obj is not None:
                return self._peel_commit_id(spec, obj)

        obj = self._revparse(spec)
        if obj is None:
            raise CommitNotFoundError(spec)
        return self._peel_commit_id(spec, obj)

    def _revparse(self, spec: str) -> pygit2.Object | None:
        try:
            return self._repo.revparse_single(spec)
        except (pygit2.GitError, KeyError, ValueError):
            return None

    def _peel_commit_id(self, spec: str, obj: pygit2.Object) -> str:
        if isinstance(obj, pygit2.Tag):
            try:
                obj = obj.peel(pygit2.Commit)
            except (pygit2.GitError, KeyError, ValueError) as e:
                raise CommitNotFoundError(spec, "tag does not point at a commit") from e
        if not isinstance(obj, pygit2.Commit):
            raise CommitNotFoundError(spec, f"{obj.type_str} {obj.id} is not a commit")
        return str(obj.id)
