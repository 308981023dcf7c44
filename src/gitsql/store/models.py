"""SQLModel definitions for the three query relations.

Column names are the public query surface: users write SQL against
``commits``, ``branches`` and ``tags`` directly. Timestamps are stored as
``YYYY-MM-DD HH:MM:SS`` UTC text.
"""

from sqlalchemy import Table
from sqlmodel import Field, SQLModel


class CommitRow(SQLModel, table=True):
    """A commit reached by some traversal. Never updated or deleted."""

    __tablename__ = "commits"

    id: str = Field(primary_key=True)
    author: str | None = None
    date: str = Field(index=True)
    message: str | None = None


class BranchRow(SQLModel, table=True):
    """A local or remote-tracking branch ref, snapshotted at startup."""

    __tablename__ = "branches"

    name: str = Field(primary_key=True)
    type: str = Field(primary_key=True)  # "local" | "remote"
    head_commit_id: str | None = Field(default=None, index=True)
    head_commit_date: str | None = None


class TagRow(SQLModel, table=True):
    """A tag ref. Keyed on name: refs may share a tag object or a target."""

    __tablename__ = "tags"

    name: str = Field(primary_key=True)
    id: str = Field(index=True)
    target_id: str = Field(index=True)
    target_type: str
    tagger: str | None = None
    date: str | None = None
    message: str | None = None


def relation_tables() -> list[Table]:
    """The tables a relation store creates, in creation order."""
    models: list[type[SQLModel]] = [CommitRow, BranchRow, TagRow]
    return [model.__table__ for model in models]  # type: ignore[attr-defined]
