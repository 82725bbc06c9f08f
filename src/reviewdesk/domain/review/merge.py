"""Shallow merge of overlay patches over canonical rows."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from reviewdesk.domain.model import Row

    from .overlay import EditOverlay, FieldPatch


def merge_row(row: Row, patch: FieldPatch | None) -> Row:
    """Return ``row`` with every field in ``patch`` overridden.

    ``row`` itself is never modified; without a patch it is returned as is.
    """

    if not patch:
        return row
    return replace(row, **patch)


def apply_overlay(rows: Iterable[Row], overlay: EditOverlay) -> list[Row]:
    return [merge_row(row, overlay.get(row.key)) for row in rows]
