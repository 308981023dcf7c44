"""Core module exports."""

from gitsql.core.errors import ConfigError, ErrorCode, GitSqlError
from gitsql.core.logging import (
    bind_command_id,
    configure_logging,
    get_logger,
    unbind_command_id,
)
from gitsql.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ErrorCode",
    "GitSqlError",
    "ConfigError",
    # Logging
    "bind_command_id",
    "configure_logging",
    "get_logger",
    "unbind_command_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
