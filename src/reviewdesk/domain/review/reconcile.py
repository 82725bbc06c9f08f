"""Minimal update patches between two displayed row sets."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from reviewdesk.domain.model import row_fields

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from reviewdesk.domain.model import Row


@dataclass(frozen=True, slots=True)
class RowRemoved:
    key: str


@dataclass(frozen=True, slots=True)
class RowInserted:
    key: str
    index: int
    row: Row


@dataclass(frozen=True, slots=True)
class RowUpdated:
    key: str
    row: Row
    changes: Mapping[str, object] = field(default_factory=dict[str, object])


type RowPatch = RowRemoved | RowInserted | RowUpdated


def changed_fields(before: Row, after: Row) -> dict[str, object]:
    """Return the fields of ``after`` whose value differs from ``before``."""

    if before == after:
        return {}
    old = row_fields(before)
    new = row_fields(after)
    return {
        name: value
        for name, value in new.items()
        if name not in old or old[name] != value
    }


def diff_rows(
    previous: Sequence[Row],
    current: Sequence[Row],
    *,
    keys: Iterable[str] | None = None,
) -> list[RowPatch]:
    """Compute the patches that turn ``previous`` into ``current``.

    Rows are matched by key. Removals come first, then insertions in ascending
    display index, then field-level updates. Unchanged rows produce nothing.
    When ``keys`` is given only those keys are compared.
    """

    scope = set(keys) if keys is not None else None
    before = {row.key: row for row in previous}
    after = {row.key: row for row in current}

    removed: list[RowPatch] = []
    inserted: list[RowPatch] = []
    updated: list[RowPatch] = []

    for row in previous:
        if (scope is None or row.key in scope) and row.key not in after:
            removed.append(RowRemoved(row.key))

    for index, row in enumerate(current):
        if scope is not None and row.key not in scope:
            continue
        old = before.get(row.key)
        if old is None:
            inserted.append(RowInserted(row.key, index, row))
            continue
        changes = changed_fields(old, row)
        if changes:
            updated.append(RowUpdated(row.key, row, changes))

    return removed + inserted + updated
