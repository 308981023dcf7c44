"""CLI utilities."""

from pathlib import Path

import click
import pygit2


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree the way git does. For a bare repository
    the git directory itself is the root.
    If start_path is None, uses the current working directory.

    Args:
        start_path: Starting directory to search from

    Returns:
        Path to repository root

    Raises:
        click.ClickException: If not inside a git repository
    """
    if start_path is None:
        start_path = Path.cwd()

    discovered = pygit2.discover_repository(str(start_path.resolve()))
    if discovered is None:
        raise click.ClickException(f"Not inside a git repository: {start_path}")

    repo = pygit2.Repository(discovered)
    return Path(repo.workdir or repo.path).resolve()
