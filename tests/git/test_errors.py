"""Tests for git error types."""

from __future__ import annotations

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


class TestGitErrorMessages:
    """Tests for git error message formatting."""

    def test_not_a_repository(self) -> None:
        err = NotARepositoryError("/tmp/x")
        assert "/tmp/x" in str(err)
        assert err.path == "/tmp/x"

    def test_object_read(self) -> None:
        err = ObjectReadError("abc123", "object not found")
        assert "abc123" in str(err)
        assert err.reason == "object not found"

    def test_traversal_io_reports_inserted(self) -> None:
        err = TraversalIOError("abc123", "object not found", 7)
        assert "7 commits inserted" in str(err)
        assert err.inserted == 7

    def test_commit_not_found(self) -> None:
        err = CommitNotFoundError("deadbeef")
        assert str(err) == "No commit found for 'deadbeef'"

    def test_ambiguous_commit(self) -> None:
        err = AmbiguousCommitError("abcd", "2 matches")
        assert "'abcd'" in str(err)
        assert err.spec == "abcd"

    def test_tag_chain_exceeded(self) -> None:
        err = TagChainExceededError("v1", 32)
        assert "32" in str(err)
        assert err.name == "v1"


class TestGitErrorHierarchy:
    def test_resolution_errors(self) -> None:
        assert issubclass(CommitNotFoundError, CommitResolutionError)
        assert issubclass(AmbiguousCommitError, CommitResolutionError)
        assert issubclass(CommitResolutionError, GitError)

    def test_tag_errors(self) -> None:
        assert issubclass(TagChainExceededError, TagResolutionError)
        assert issubclass(TagResolutionError, GitError)
