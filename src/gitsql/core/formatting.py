"""Cell formatting for terminal output."""

from __future__ import annotations

from typing import Any


def format_cell(value: Any) -> str:
    """Render one result value as table cell text.

    NULL for None, ``Blob`` for binary values, and ``\\r\\n`` collapsed
    to ``\\n`` so carriage returns cannot break table borders.
    """
    if value is None:
        return "NULL"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "Blob"
    if isinstance(value, str):
        return value.replace("\r\n", "\n")
    return str(value)
