"""Edit overlay, reconciliation and the review session."""

from __future__ import annotations

from .commit import AnalysisDocumentUpdate, build_analysis_document
from .filtering import NEEDS_REVIEW_ACTION, ReviewFilter, matches_review_mode
from .merge import apply_overlay, merge_row
from .overlay import Edit, EditOverlay
from .portal import PortalResource, portal_resources
from .reconcile import RowInserted, RowPatch, RowRemoved, RowUpdated, diff_rows
from .session import (
    LoadFailed,
    ReviewSession,
    ReviewSource,
    RowsPatched,
    RowsReplaced,
    SessionEvent,
)

__all__ = [
    "NEEDS_REVIEW_ACTION",
    "AnalysisDocumentUpdate",
    "Edit",
    "EditOverlay",
    "LoadFailed",
    "PortalResource",
    "ReviewFilter",
    "ReviewSession",
    "ReviewSource",
    "RowInserted",
    "RowPatch",
    "RowRemoved",
    "RowUpdated",
    "RowsPatched",
    "RowsReplaced",
    "SessionEvent",
    "apply_overlay",
    "build_analysis_document",
    "diff_rows",
    "matches_review_mode",
    "merge_row",
    "portal_resources",
]
