"""Centralized error mapping for pygit2 exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from gitsql.git.errors import ObjectReadError


class ErrorMapper:
    """Maps pygit2 exceptions to domain errors."""

    @staticmethod
    @contextmanager
    def guard(oid: str) -> Iterator[None]:
        """Context manager translating object-database failures for *oid*."""
        try:
            yield
        except (pygit2.GitError, ValueError, OSError) as e:
            raise ObjectReadError(oid, str(e) or type(e).__name__) from e


def object_read(oid: str) -> AbstractContextManager[None]:
    """Guard a read of *oid*; any failure surfaces as ObjectReadError."""
    return ErrorMapper.guard(oid)
