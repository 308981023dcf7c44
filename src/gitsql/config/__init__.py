"""Config module exports."""

from gitsql.config.loader import load_config
from gitsql.config.models import (
    DisplayConfig,
    GitSqlConfig,
    LoggingConfig,
    QueryConfig,
    TraversalConfig,
)

__all__ = [
    "load_config",
    "GitSqlConfig",
    "LoggingConfig",
    "TraversalConfig",
    "QueryConfig",
    "DisplayConfig",
]
