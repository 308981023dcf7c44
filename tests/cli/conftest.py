"""Isolation for CLI invocations."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path) -> Generator[None, None, None]:
    """Ignore any real global config and undo the logging setup each run installs."""
    with patch("gitsql.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    structlog.reset_defaults()
