"""String parsing helpers for git ref names and messages."""

from __future__ import annotations

import re

REFS_HEADS_PREFIX = "refs/heads/"
REFS_REMOTES_PREFIX = "refs/remotes/"
REFS_TAGS_PREFIX = "refs/tags/"

# (begin, end) marker pairs of signature blocks git embeds in tag messages
SIGNATURE_MARKERS: tuple[tuple[str, str], ...] = (
    ("-----BEGIN PGP SIGNATURE-----", "-----END PGP SIGNATURE-----"),
    ("-----BEGIN SSH SIGNATURE-----", "-----END SSH SIGNATURE-----"),
)

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def extract_tag_name(refname: str) -> str | None:
    """Extract tag name from full ref (e.g., 'refs/tags/v1.0' -> 'v1.0')."""
    if refname.startswith(REFS_TAGS_PREFIX):
        return refname[len(REFS_TAGS_PREFIX) :]
    return None


def extract_branch_name(refname: str) -> str | None:
    """Extract branch name from full ref (e.g., 'refs/heads/main' -> 'main')."""
    if refname.startswith(REFS_HEADS_PREFIX):
        return refname[len(REFS_HEADS_PREFIX) :]
    return None


def extract_remote_branch_name(refname: str) -> str | None:
    """Extract remote branch name (e.g., 'refs/remotes/origin/main' -> 'origin/main')."""
    if refname.startswith(REFS_REMOTES_PREFIX):
        return refname[len(REFS_REMOTES_PREFIX) :]
    return None


def is_hex(text: str) -> bool:
    return bool(_HEX_RE.match(text))


def strip_signature(message: str) -> str:
    """Remove embedded PGP/SSH signature blocks from a tag message.

    Each block is removed from its BEGIN marker through its END marker
    inclusive; a BEGIN without an END removes the rest of the message.
    Trailing whitespace is trimmed only when something was removed.
    """
    result = message
    removed = False
    for begin, end in SIGNATURE_MARKERS:
        while (start := result.find(begin)) != -1:
            stop = result.find(end, start + len(begin))
            if stop == -1:
                result = result[:start]
            else:
                result = result[:start] + result[stop + len(end) :]
            removed = True
    return result.rstrip() if removed else result
