"""structlog setup for gitsql.

Every module logs through ``structlog.get_logger()``; events are routed
into stdlib ``logging`` so one ``LoggingConfig`` can fan them out to
several outputs, each with its own renderer and level.

Interactive commands are correlated with ``bind_command_id``: the id
lives in structlog's context variables and is merged into every event
logged until ``unbind_command_id``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from gitsql.config.models import LoggingConfig, LogOutputConfig

_COMMAND_ID_KEY = "command_id"

# Added to structlog events and to records from plain stdlib loggers alike
_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def bind_command_id(command_id: str | None = None) -> str:
    """Tag subsequent events with *command_id* (a fresh short id by default)."""
    command_id = command_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{_COMMAND_ID_KEY: command_id})
    return command_id


def unbind_command_id() -> None:
    structlog.contextvars.unbind_contextvars(_COMMAND_ID_KEY)


class SpinnerAwareFilter(logging.Filter):
    """Drops records while a spinner owns the terminal (console outputs only)."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        # Deferred: progress imports this module's get_logger
        from gitsql.core.progress import is_console_suppressed

        return not is_console_suppressed()


def configure_logging(config: LoggingConfig, *, level: str | None = None) -> None:
    """Install handlers for every output in *config*.

    *level* overrides ``config.level`` (``-v`` passes ``"DEBUG"``). Outputs
    without their own level inherit the effective root level. Calling this
    again replaces the previous handlers.
    """
    root_level = _level_number(level or config.level)

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    root.setLevel(root_level)

    for output in config.outputs:
        handler = _build_handler(output)
        handler.setLevel(_level_number(output.level) if output.level else root_level)
        root.addHandler(handler)


def _level_number(name: str) -> int:
    return logging.getLevelNamesMapping()[name.upper()]


def _build_handler(output: LogOutputConfig) -> logging.Handler:
    stream = _console_stream(output.destination)
    handler: logging.Handler
    if stream is not None:
        handler = logging.StreamHandler(stream)
        handler.addFilter(SpinnerAwareFilter())
        colors = stream.isatty()
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        colors = False

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)
    )
    return handler


def _console_stream(destination: str) -> TextIO | None:
    if destination == "stderr":
        return sys.stderr
    if destination == "stdout":
        return sys.stdout
    return None


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger bound with ``logger=<name>`` when *name* is given."""
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name else logger  # type: ignore[no-any-return]
