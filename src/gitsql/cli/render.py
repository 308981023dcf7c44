"""Result set rendering: rich tables and JSON."""

from __future__ import annotations

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gitsql.core.formatting import format_cell
from gitsql.store import ResultSet

EMPTY_RESULT_TIP = "Tip: use the `traverse <commit id>` command to insert commit history"


def build_table(result: ResultSet) -> Table:
    table = Table(box=box.SQUARE, show_header=True, header_style="bold", show_lines=True)
    for column in result.columns:
        table.add_column(Text(column), overflow="fold")
    for row in result.rows:
        table.add_row(*(Text(format_cell(value)) for value in row))
    return table


def render_result(
    console: Console,
    sql: str,
    result: ResultSet,
    *,
    show_tip: bool = True,
) -> None:
    """Print *result* as a table followed by the row count."""
    if result.columns:
        console.print(build_table(result), markup=False, highlight=False)
    console.print(f"Rows returned: {result.row_count}", markup=False, highlight=False)
    if show_tip and result.row_count == 0 and "commits" in sql:
        console.print(EMPTY_RESULT_TIP, markup=False, highlight=False)


def _json_default(value: Any) -> str:
    return format_cell(value)


def render_json(result: ResultSet) -> str:
    """JSON array with one object per row."""
    return json.dumps(result.as_dicts(), default=_json_default)
