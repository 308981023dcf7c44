"""Ingestion: commit graph walker, tag resolver, ref catalog, traversal extender."""

from gitsql.ingest.extender import TraversalExtender
from gitsql.ingest.refs import RefCatalog, RefCatalogBuilder
from gitsql.ingest.tags import SkippedTag, TagResolution, TagResolver
from gitsql.ingest.walker import CommitGraphWalker, WalkStats

__all__ = [
    "CommitGraphWalker",
    "WalkStats",
    "TagResolver",
    "TagResolution",
    "SkippedTag",
    "RefCatalogBuilder",
    "RefCatalog",
    "TraversalExtender",
]
