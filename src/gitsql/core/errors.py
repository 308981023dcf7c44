"""Typed errors for problems found before a repository is read.

Only configuration problems carry an ``ErrorCode``: they stop the command
before ingestion starts, and ``gitsql --json`` reports them as a JSON
object so scripts can branch on the code. Git and query failures use
their own hierarchies (``gitsql.git.errors``, ``gitsql.store.errors``).

Code ranges:
- 2xxx: Config
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004


@dataclass(frozen=True, slots=True)
class GitSqlError(Exception):
    """An error with a stable code and structured details."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Payload printed to stdout by ``--json`` runs that fail at startup."""
        return {
            "error": self.code.name,
            "code": int(self.code),
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.code.name} ({int(self.code)}): {self.message}"


class ConfigError(GitSqlError):
    """A config file is unreadable, malformed, or holds an invalid value."""

    @classmethod
    def yaml_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            ErrorCode.CONFIG_PARSE_ERROR,
            f"{path} is not a valid config file: {reason}",
            {"path": path, "reason": reason},
        )

    @classmethod
    def invalid_field(cls, field: str, value: Any, reason: str) -> "ConfigError":
        """*field* is the dotted path, e.g. ``traversal.max_tag_chain``."""
        return cls(
            ErrorCode.CONFIG_INVALID_VALUE,
            f"{field} = {value!r}: {reason}",
            {"field": field, "value": value, "reason": reason},
        )

    @classmethod
    def missing_file(cls, path: str) -> "ConfigError":
        return cls(
            ErrorCode.CONFIG_FILE_NOT_FOUND,
            f"config file {path} does not exist",
            {"path": path},
        )
