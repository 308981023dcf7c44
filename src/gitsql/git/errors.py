"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not (inside) a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class ObjectReadError(GitError):
    """Object is missing, corrupt, or not of the expected kind."""

    def __init__(self, oid: str, reason: str) -> None:
        super().__init__(f"Cannot read object {oid}: {reason}")
        self.oid = oid
        self.reason = reason


class TraversalIOError(GitError):
    """A commit reachable from the walk's seeds could not be read.

    Rows inserted before the failure stay in the store unless the walk
    ran in atomic mode.
    """

    def __init__(self, oid: str, reason: str, inserted: int) -> None:
        super().__init__(f"Traversal aborted at {oid}: {reason} ({inserted} commits inserted)")
        self.oid = oid
        self.reason = reason
        self.inserted = inserted


# =============================================================================
# Commit Resolution Errors
# =============================================================================


class CommitResolutionError(GitError):
    """A user-supplied commit identifier did not name exactly one commit."""

    def __init__(self, spec: str, message: str) -> None:
        super().__init__(message)
        self.spec = spec


class CommitNotFoundError(CommitResolutionError):
    """No commit matches the identifier."""

    def __init__(self, spec: str, reason: str | None = None) -> None:
        reason_part = f" ({reason})" if reason else ""
        super().__init__(spec, f"No commit found for {spec!r}{reason_part}")
        self.reason = reason


class AmbiguousCommitError(CommitResolutionError):
    """More than one object id starts with the given prefix."""

    def __init__(self, spec: str, reason: str | None = None) -> None:
        reason_part = f": {reason}" if reason else ""
        super().__init__(spec, f"Ambiguous commit prefix {spec!r}{reason_part}")
        self.reason = reason


# =============================================================================
# Tag Resolution Errors
# =============================================================================


class TagResolutionError(GitError):
    """A single tag could not be resolved; other tags are unaffected."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class TagChainExceededError(TagResolutionError):
    """Annotated tag chain is longer than the configured hop limit."""

    def __init__(self, name: str, limit: int) -> None:
        super().__init__(name, f"Tag {name!r} exceeds the chain limit of {limit} hops")
        self.limit = limit
