"""gitsql - query a git repository's commits, branches and tags with SQL."""

__version__ = "0.1.0"
