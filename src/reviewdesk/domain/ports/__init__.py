"""Domain port definitions for adapters."""

from __future__ import annotations

from .analytics import AnalyticsFeed, PageViewEvent
from .metadata import (
    DirectoryEntry,
    DocumentNotFound,
    DocumentWriter,
    FileInfo,
    MetadataStore,
    MetadataStoreError,
)

__all__ = [
    "AnalyticsFeed",
    "DirectoryEntry",
    "DocumentNotFound",
    "DocumentWriter",
    "FileInfo",
    "MetadataStore",
    "MetadataStoreError",
    "PageViewEvent",
]
