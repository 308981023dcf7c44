"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GITSQL__SECTION__KEY)
3. Repo YAML (.gitsql/config.yaml)
4. Global YAML (~/.config/gitsql/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    GITSQL__<SECTION>__<KEY>=<VALUE>

Examples:
    GITSQL__LOGGING__LEVEL=DEBUG
    GITSQL__TRAVERSAL__MAX_TAG_CHAIN=8
    GITSQL__QUERY__RUN_INITIAL_QUERY=false
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from gitsql.config.constants import DEFAULT_INITIAL_QUERY, DEFAULT_MAX_TAG_CHAIN

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GITSQL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO reports ingestion statistics; DEBUG is verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class TraversalConfig(BaseModel):
    """Commit graph and tag traversal configuration.

    Env vars:
        GITSQL__TRAVERSAL__MAX_TAG_CHAIN: Max annotated-tag hops before a tag is skipped
        GITSQL__TRAVERSAL__ATOMIC: Roll back a walk that fails partway
        GITSQL__TRAVERSAL__INCLUDE_HEAD: Seed the startup walk from HEAD as well
    """

    max_tag_chain: int = Field(
        default=DEFAULT_MAX_TAG_CHAIN,
        description="Maximum number of tag-to-tag hops followed while dereferencing "
        "an annotated tag. Tags with longer chains are skipped and reported.",
    )
    atomic: bool = Field(
        default=False,
        description="When true, a walk aborted by an unreadable object inserts nothing. "
        "When false, commits inserted before the failure are kept.",
    )
    include_head: bool = Field(
        default=True,
        description="Also walk from HEAD (matters when HEAD is detached).",
    )

    @field_validator("max_tag_chain")
    @classmethod
    def validate_max_tag_chain(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_tag_chain must be >= 1, got {v}")
        return v


class QueryConfig(BaseModel):
    """Query bridge configuration.

    Env vars:
        GITSQL__QUERY__INITIAL_QUERY: Query run once after startup
        GITSQL__QUERY__RUN_INITIAL_QUERY: Disable the startup query
        GITSQL__QUERY__READ_ONLY: Reject statements that write to the relations
    """

    initial_query: str = Field(
        default=DEFAULT_INITIAL_QUERY,
        description="Query echoed and executed once ingestion finishes.",
    )
    run_initial_query: bool = True
    read_only: bool = Field(
        default=True,
        description="Execute user SQL with SQLite query_only enabled. Disabling allows "
        "statements that can desynchronize the commits table from the dedup index.",
    )


class DisplayConfig(BaseModel):
    """Terminal rendering configuration.

    Env vars:
        GITSQL__DISPLAY__PROMPT: Interactive prompt
        GITSQL__DISPLAY__MAX_WIDTH: Table width cap (default: terminal width)
    """

    prompt: str = ">> "
    max_width: int | None = Field(
        default=None,
        description="Maximum table width in columns. None uses the terminal width.",
    )
    empty_result_tip: bool = Field(
        default=True,
        description="Suggest `traverse` when a query over commits returns no rows.",
    )

    @field_validator("max_width")
    @classmethod
    def validate_max_width(cls, v: int | None) -> int | None:
        if v is not None and v < 20:
            raise ValueError(f"max_width must be >= 20, got {v}")
        return v


class GitSqlConfig(BaseModel):
    """Root configuration for gitsql.

    All settings can be configured via:
    1. Environment variables: GITSQL__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    traversal: TraversalConfig = Field(default_factory=TraversalConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
