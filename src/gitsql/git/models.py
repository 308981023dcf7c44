"""Serializable records for the commits, branches and tags relations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

import pygit2

from gitsql.config.constants import SHORT_ID_LENGTH, TIMESTAMP_FORMAT
from gitsql.git._internal.parsing import strip_signature

BranchKind = Literal["local", "remote"]
ObjectKind = Literal["commit", "tree", "blob", "tag"]


def utc_from_timestamp(seconds: int) -> datetime:
    """Second-precision UTC datetime from a git timestamp."""
    return datetime.fromtimestamp(seconds, tz=UTC)


def format_timestamp(value: datetime | None) -> str | None:
    """Text form stored in the relations: ``YYYY-MM-DD HH:MM:SS`` (UTC)."""
    if value is None:
        return None
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def _decode(raw: bytes, encoding: str | None) -> str:
    try:
        return raw.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        # Unknown declared encoding
        return raw.decode("utf-8", errors="replace")


def display_name(sig: pygit2.Signature) -> str:
    """Signature name, or the email when the name is empty."""
    name = sig.name.strip()
    return name if name else sig.email.strip()


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """One row of the commits relation."""

    id: str
    author: str
    date: datetime
    message: str

    @property
    def short_id(self) -> str:
        return self.id[:SHORT_ID_LENGTH]

    @classmethod
    def from_pygit2(cls, commit: pygit2.Commit) -> CommitRecord:
        return cls(
            id=str(commit.id),
            author=display_name(commit.author),
            date=utc_from_timestamp(commit.commit_time),
            message=_decode(commit.raw_message, commit.message_encoding),
        )


@dataclass(frozen=True, slots=True)
class BranchRecord:
    """One row of the branches relation.

    Head fields are None when the ref dangles or does not reach a commit.
    """

    name: str
    kind: BranchKind
    head_commit_id: str | None
    head_commit_date: datetime | None

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.kind,
            "head_commit_id": self.head_commit_id,
            "head_commit_date": format_timestamp(self.head_commit_date),
        }


@dataclass(frozen=True, slots=True)
class TagRecord:
    """One row of the tags relation.

    ``target_id``/``target_type`` always describe the final non-tag object.
    Lightweight tags have no tag object: ``id`` is the target id and the
    tagger/date/message fields are None.
    """

    id: str
    name: str
    target_id: str
    target_type: ObjectKind
    tagger: str | None = None
    date: datetime | None = None
    message: str | None = None

    @property
    def is_annotated(self) -> bool:
        return self.id != self.target_id

    @classmethod
    def annotated(
        cls, name: str, tag: pygit2.Tag, target_id: str, target_type: ObjectKind
    ) -> TagRecord:
        tagger = tag.tagger
        raw_message = tag.raw_message
        message = None
        if raw_message is not None:
            message = strip_signature(_decode(raw_message, None))
        return cls(
            id=str(tag.id),
            name=name,
            target_id=target_id,
            target_type=target_type,
            tagger=display_name(tagger) if tagger else None,
            date=utc_from_timestamp(tagger.time) if tagger else None,
            message=message,
        )

    @classmethod
    def lightweight(cls, name: str, target_id: str, target_type: ObjectKind) -> TagRecord:
        return cls(id=target_id, name=name, target_id=target_id, target_type=target_type)

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "target_id": self.target_id,
            "target_type": self.target_type,
            "tagger": self.tagger,
            "date": format_timestamp(self.date),
            "message": self.message,
        }
