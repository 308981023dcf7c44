"""Interactive loop: SQL statements and the traverse command."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from gitsql.cli.render import render_json, render_result
from gitsql.config import DisplayConfig
from gitsql.core.logging import bind_command_id, get_logger, unbind_command_id
from gitsql.core.progress import pluralize, spinner, status
from gitsql.git import GitError
from gitsql.session import RepoSession
from gitsql.store import QueryError

log = get_logger("repl")

EXIT_COMMANDS = frozenset({"exit", "quit"})

HELP_TEXT = """\
Available commands:
 - `exit` or `quit`: Exit the program.
 - `help`: Display this help message.
 - `traverse <commit id>`: Insert the history reachable from a commit (full id, prefix or ref name).
 - Anything else is run as SQL against the `commits`, `branches` and `tags` tables."""


class Repl:
    """Reads commands, dispatches them against a session, prints results.

    Errors are printed and never end the loop.
    """

    def __init__(
        self,
        session: RepoSession,
        *,
        console: Console,
        display: DisplayConfig,
        as_json: bool = False,
    ) -> None:
        self._session = session
        self._console = console
        self._display = display
        self._as_json = as_json

    def echo_command(self, line: str) -> None:
        """Show *line* as if it had been typed at the prompt."""
        self._console.print(f"{self._display.prompt}{line}", markup=False, highlight=False)

    def execute(self, line: str) -> bool:
        """Run one command. Returns False if it failed."""
        line = line.strip()
        parts = line.split()
        if not parts:
            return True
        if parts == ["help"]:
            self._console.print(HELP_TEXT, markup=False, highlight=False)
            return True
        if parts[0] == "traverse":
            if len(parts) != 2:
                status("usage: traverse <commit id>", style="error")
                return False
            return self._traverse(parts[1])
        return self._query(line)

    def run(self) -> None:
        """Loop until exit, quit, EOF or Ctrl-C at the prompt."""
        while True:
            try:
                line = self._console.input(escape(self._display.prompt))
            except (EOFError, KeyboardInterrupt):
                self._console.print()
                break

            command = line.strip()
            if not command:
                continue
            if command in EXIT_COMMANDS:
                break

            bind_command_id()
            try:
                self.execute(command)
            finally:
                unbind_command_id()

    def _traverse(self, commit_id: str) -> bool:
        try:
            with spinner(f"Traversing from {commit_id}"):
                inserted = self._session.traverse(commit_id)
        except GitError as e:
            log.debug("traverse_failed", spec=commit_id, error=str(e))
            status(f"traverse error. {e}", style="error")
            return False
        status(f"Inserted {pluralize(inserted, 'commit')}", style="success")
        return True

    def _query(self, sql: str) -> bool:
        try:
            result = self._session.run_query(sql)
        except QueryError as e:
            status(f"SQL error. {e.message}", style="error")
            return False
        if self._as_json:
            click.echo(render_json(result))
        else:
            render_result(
                self._console, sql, result, show_tip=self._display.empty_result_tip
            )
        return True
