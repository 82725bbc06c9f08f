"""Error taxonomy of the review engine.

Only ``SourceUnavailable`` escapes a load. The document and analytics errors
are raised internally and absorbed per entity so a batch always completes.
"""

from __future__ import annotations


class ReviewError(RuntimeError):
    """Base class for review engine failures."""


class SourceUnavailable(ReviewError):
    """Raised when the root of a load cannot be listed at all."""

    def __init__(self, message: str, *, root: str) -> None:
        super().__init__(message)
        self.root = root


class DocumentMissing(ReviewError):
    """An expected per-entity document is absent."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Document not found: {path}")
        self.path = path


class DocumentMalformed(ReviewError):
    """A per-entity document exists but does not parse."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed document {path}: {reason}")
        self.path = path
        self.reason = reason


class AnalyticsUnavailable(ReviewError):
    """The analytics feed could not be queried or aggregated."""


class InvalidEdit(ValueError):
    """Raised when an edit targets a field that cannot be edited."""

    def __init__(self, key: str, field: str) -> None:
        super().__init__(f"Field {field!r} of row {key!r} is not editable")
        self.key = key
        self.field = field
