"""Test fixtures for git module."""

from __future__ import annotations

import pytest

from tests.conftest import RepoBuilder


@pytest.fixture
def colliding_blobs(builder: RepoBuilder) -> tuple[str, str, str]:
    """Two blob ids sharing their first four hex digits: (prefix, first, second)."""
    seen: dict[str, str] = {}
    for i in range(50_000):
        oid = str(builder.repo.create_blob(f"blob {i}\n".encode()))
        prefix = oid[:4]
        if prefix in seen:
            return prefix, seen[prefix], oid
        seen[prefix] = oid
    pytest.fail("no 4-digit prefix collision found")
