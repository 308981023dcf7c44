"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides repository builders shared by every test package.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local gitsql package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# 2024-01-01 00:00:00 UTC
BASE_TIME = 1_704_067_200


class RepoBuilder:
    """Writes commits, refs and tags straight into a repository's object store."""

    def __init__(self, repo: pygit2.Repository) -> None:
        self.repo = repo
        self._tick = 0

    @property
    def path(self) -> Path:
        return Path(self.repo.workdir)

    def signature(
        self, name: str = "Test User", email: str = "test@example.com"
    ) -> pygit2.Signature:
        self._tick += 1
        return pygit2.Signature(name, email, BASE_TIME + self._tick * 60, 0)

    def commit(
        self,
        message: str,
        parents: Sequence[str] = (),
        *,
        ref: str | None = None,
        author: pygit2.Signature | None = None,
    ) -> str:
        """Create a commit with a one-file tree; returns its hex id."""
        sig = author or self.signature()
        blob = self.repo.create_blob(message.encode())
        builder = self.repo.TreeBuilder()
        builder.insert("file.txt", blob, pygit2.enums.FileMode.BLOB)
        tree = builder.write()
        oid = self.repo.create_commit(ref, sig, sig, message, tree, list(parents))
        return str(oid)

    def branch(self, name: str, target: str) -> None:
        self.repo.references.create(f"refs/heads/{name}", target, force=True)

    def remote_branch(self, name: str, target: str) -> None:
        self.repo.references.create(f"refs/remotes/{name}", target, force=True)

    def symbolic(self, refname: str, target_refname: str) -> None:
        self.repo.references.create(refname, target_refname, force=True)

    def annotated_tag(
        self,
        name: str,
        target: str,
        message: str,
        *,
        target_type: pygit2.enums.ObjectType = pygit2.enums.ObjectType.COMMIT,
    ) -> str:
        oid = self.repo.create_tag(name, target, target_type, self.signature(), message)
        return str(oid)

    def lightweight_tag(self, name: str, target: str) -> None:
        self.repo.references.create(f"refs/tags/{name}", target)

    def delete_loose_object(self, oid: str) -> None:
        """Remove an object file so later reads fail."""
        path = Path(self.repo.path) / "objects" / oid[:2] / oid[2:]
        path.chmod(0o644)
        path.unlink()


@pytest.fixture
def empty_repo(tmp_path: Path) -> pygit2.Repository:
    """Freshly initialized repository with an unborn main branch."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"
    return repo


@pytest.fixture
def builder(empty_repo: pygit2.Repository) -> RepoBuilder:
    return RepoBuilder(empty_repo)


@pytest.fixture
def two_branch_repo(builder: RepoBuilder) -> dict[str, str]:
    """main: R -> H1, feature: R -> H2, annotated tag v1 on H1, HEAD on main."""
    root = builder.commit("Root commit")
    h1 = builder.commit("Commit on main", [root])
    h2 = builder.commit("Commit on feature", [root])
    builder.branch("main", h1)
    builder.branch("feature", h2)
    builder.repo.set_head("refs/heads/main")
    builder.annotated_tag("v1", h1, "Release v1\n")
    return {"R": root, "H1": h1, "H2": h2}


@pytest.fixture
def diamond_repo(builder: RepoBuilder) -> dict[str, str]:
    """A <- B, A <- C, (B, C) <- D merge; main at D."""
    a = builder.commit("A")
    b = builder.commit("B", [a])
    c = builder.commit("C", [a])
    d = builder.commit("D merge", [b, c])
    builder.branch("main", d)
    builder.repo.set_head("refs/heads/main")
    return {"A": a, "B": b, "C": c, "D": d}


@pytest.fixture
def tagged_repo(builder: RepoBuilder) -> dict[str, str]:
    """main at C with nested, lightweight and tree tags."""
    root = builder.commit("Root")
    c = builder.commit("Tip", [root])
    builder.branch("main", c)
    builder.repo.set_head("refs/heads/main")

    inner = builder.annotated_tag("inner", c, "Inner tag\n")
    outer = builder.annotated_tag(
        "outer", inner, "Outer tag\n", target_type=pygit2.enums.ObjectType.TAG
    )
    builder.lightweight_tag("light", c)
    tree = str(builder.repo[c].tree_id)
    builder.lightweight_tag("tree-tag", tree)
    return {"root": root, "C": c, "inner": inner, "outer": outer, "tree": tree}
