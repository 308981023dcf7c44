"""gitsql CLI - gitsql command."""

import json
from pathlib import Path

import click
from rich.console import Console

from gitsql import __version__
from gitsql.cli.repl import Repl
from gitsql.cli.utils import find_repo_root
from gitsql.config import load_config
from gitsql.core.errors import ConfigError
from gitsql.core.logging import configure_logging
from gitsql.core.progress import pluralize, spinner, status
from gitsql.git import GitError
from gitsql.session import RepoSession


@click.command()
@click.version_option(version=__version__, prog_name="gitsql")
@click.argument(
    "path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file to use instead of .gitsql/config.yaml",
)
@click.option(
    "-e",
    "--execute",
    "statements",
    multiple=True,
    help="Run a statement (SQL or `traverse <id>`) and exit. Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--no-initial-query", is_flag=True, help="Skip the startup query")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    path: Path,
    config_file: Path | None,
    statements: tuple[str, ...],
    as_json: bool,
    no_initial_query: bool,
    verbose: bool,
) -> None:
    """Query a git repository's commits, branches and tags with SQL.

    PATH is any directory inside the repository (default: current directory).
    """
    repo_root = find_repo_root(path)

    try:
        config = load_config(repo_root, config_file=config_file)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps(e.to_dict(), default=str))
            ctx.exit(1)
        raise click.ClickException(str(e)) from e

    configure_logging(config.logging, level="DEBUG" if verbose else None)

    try:
        with spinner("Reading repository"):
            session = RepoSession.open(repo_root, config)
    except GitError as e:
        raise click.ClickException(str(e)) from e

    with session:
        report = session.report
        if report is not None:
            for skipped in report.skipped_tags:
                status(skipped.reason, style="warning")
            status(
                f"Loaded {pluralize(report.commit_count, 'commit')}, "
                f"{pluralize(report.branch_count, 'branch', 'branches')}, "
                f"{pluralize(report.tag_count, 'tag')}",
                style="success",
            )

        repl = Repl(
            session,
            console=Console(width=config.display.max_width),
            display=config.display,
            as_json=as_json,
        )

        if statements:
            failures = sum(1 for statement in statements if not repl.execute(statement))
            if failures:
                ctx.exit(1)
            return

        if config.query.run_initial_query and not no_initial_query:
            initial = config.query.initial_query
            repl.echo_command(initial)
            if not repl.execute(initial):
                ctx.exit(1)

        repl.run()


if __name__ == "__main__":
    cli()
