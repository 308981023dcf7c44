"""Tests for the ref catalog builder."""

from __future__ import annotations

from datetime import UTC, datetime

import pygit2
import pytest

from gitsql.git import RepoAccess, TraversalIOError
from gitsql.ingest import RefCatalogBuilder
from tests.conftest import RepoBuilder


class TestRefCatalogBuilder:
    def test_local_and_remote_branches(
        self, builder: RepoBuilder, two_branch_repo: dict[str, str]
    ) -> None:
        builder.remote_branch("origin/main", two_branch_repo["H1"])
        builder.symbolic("refs/remotes/origin/HEAD", "refs/remotes/origin/main")

        catalog = RefCatalogBuilder(RepoAccess(builder.path)).build()

        rows = [(b.name, b.kind, b.head_commit_id) for b in catalog.branches]
        assert rows == [
            ("feature", "local", two_branch_repo["H2"]),
            ("main", "local", two_branch_repo["H1"]),
            ("origin/HEAD", "remote", two_branch_repo["H1"]),
            ("origin/main", "remote", two_branch_repo["H1"]),
        ]

    def test_seeds_are_distinct_heads(
        self, builder: RepoBuilder, two_branch_repo: dict[str, str]
    ) -> None:
        builder.remote_branch("origin/main", two_branch_repo["H1"])

        catalog = RefCatalogBuilder(RepoAccess(builder.path)).build()

        assert catalog.seeds == (two_branch_repo["H2"], two_branch_repo["H1"])

    def test_head_commit_date(self, builder: RepoBuilder, two_branch_repo: dict[str, str]) -> None:
        catalog = RefCatalogBuilder(RepoAccess(builder.path)).build()

        main = next(b for b in catalog.branches if b.name == "main")
        # second commit written by the builder
        assert main.head_commit_date == datetime(2024, 1, 1, 0, 2, tzinfo=UTC)

    def test_dangling_remote_head(
        self, builder: RepoBuilder, two_branch_repo: dict[str, str]
    ) -> None:
        builder.symbolic("refs/remotes/origin/HEAD", "refs/remotes/origin/gone")

        catalog = RefCatalogBuilder(RepoAccess(builder.path)).build()

        dangling = next(b for b in catalog.branches if b.name == "origin/HEAD")
        assert dangling.kind == "remote"
        assert dangling.head_commit_id is None
        assert dangling.head_commit_date is None
        assert len(catalog.seeds) == 2

    def test_detached_head_is_a_seed(
        self, builder: RepoBuilder, two_branch_repo: dict[str, str]
    ) -> None:
        detached = builder.commit("Detached", [two_branch_repo["H1"]])
        builder.repo.set_head(pygit2.Oid(hex=detached))

        with_head = RefCatalogBuilder(RepoAccess(builder.path)).build()
        without_head = RefCatalogBuilder(RepoAccess(builder.path), include_head=False).build()

        assert detached in with_head.seeds
        assert detached not in without_head.seeds
        assert all(b.head_commit_id != detached for b in with_head.branches)

    def test_unborn_repository(self, builder: RepoBuilder) -> None:
        catalog = RefCatalogBuilder(RepoAccess(builder.path)).build()

        assert catalog.branches == ()
        assert catalog.seeds == ()

    def test_unreadable_branch_head(
        self, builder: RepoBuilder, two_branch_repo: dict[str, str]
    ) -> None:
        builder.delete_loose_object(two_branch_repo["H2"])

        with pytest.raises(TraversalIOError):
            RefCatalogBuilder(RepoAccess(builder.path)).build()
