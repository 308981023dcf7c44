"""Configuration constants.

Values here are not user-configurable. For configurable values, see
models.py.
"""

# =============================================================================
# Defaults shared by models.py
# =============================================================================

DEFAULT_INITIAL_QUERY = "SELECT * FROM commits ORDER BY date DESC LIMIT 1"
"""Query run automatically once startup ingestion completes."""

DEFAULT_MAX_TAG_CHAIN = 32
"""Annotated-tag hops followed before a tag is treated as malformed."""

# =============================================================================
# Internal Implementation Constants
# =============================================================================

INSERT_BATCH_SIZE = 500
"""Commit rows buffered before a bulk insert into the commits table."""

MIN_PREFIX_LENGTH = 4
"""Shortest id prefix the object database will look up."""

SHORT_ID_LENGTH = 7
"""Abbreviated id length used for display only."""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
"""UTC timestamp text stored in the relations (sorts chronologically)."""

# =============================================================================
# File Locations
# =============================================================================

REPO_CONFIG_DIR = ".gitsql"
REPO_CONFIG_FILE = "config.yaml"
GLOBAL_CONFIG_FILE = "~/.config/gitsql/config.yaml"
