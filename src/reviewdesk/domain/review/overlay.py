"""In-memory overlay of uncommitted per-row edits."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from logging import getLogger
from types import MappingProxyType

from reviewdesk.domain.errors import InvalidEdit
from reviewdesk.domain.model import EDITABLE_FIELDS

log = getLogger(__name__)

type FieldPatch = Mapping[str, object]


@dataclass(frozen=True, slots=True)
class Edit:
    """One ``(key, field, value)`` cell edit."""

    key: str
    field: str
    value: object


def coerce_edit_value(field: str, value: object) -> object:
    if field == "include_sitemap":
        return value is True or value == "true"
    if isinstance(value, str) and not value.strip():
        return None
    return value


class EditOverlay:
    """Uncommitted edits keyed by row key.

    The overlay is the only mutable surface of a review session. Entries
    survive reloads and are removed solely by ``discard`` or ``pop`` (commit).
    ``version`` increases on every change so derived caches can detect staleness.
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, object]] = {}
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> frozenset[str]:
        return frozenset(self._entries)

    def get(self, key: str) -> FieldPatch | None:
        entry = self._entries.get(key)
        return MappingProxyType(entry) if entry is not None else None

    def snapshot(self) -> dict[str, dict[str, object]]:
        return {key: dict(entry) for key, entry in self._entries.items()}

    def set(self, key: str, field: str, value: object) -> None:
        """Upsert a single edit; the most recent value wins."""

        self.apply_batch([Edit(key, field, value)])

    def apply_batch(self, edits: Iterable[Edit]) -> frozenset[str]:
        """Apply ``edits`` atomically and return the affected keys.

        Every edit is validated before any entry changes, so an invalid edit
        leaves the overlay untouched.
        """

        batch = list(edits)
        for edit in batch:
            if edit.field not in EDITABLE_FIELDS:
                raise InvalidEdit(edit.key, edit.field)
        for edit in batch:
            self._entries.setdefault(edit.key, {})[edit.field] = coerce_edit_value(
                edit.field, edit.value
            )
        affected = frozenset(edit.key for edit in batch)
        if affected:
            self._version += 1
            log.debug(f"Overlay now holds {len(self._entries)} entries after {len(batch)} edits")
        return affected

    def discard(self, keys: Iterable[str] | None = None) -> frozenset[str]:
        """Drop entries for ``keys`` (all entries when ``None``)."""

        return frozenset(self.pop(keys))

    def pop(self, keys: Iterable[str] | None = None) -> dict[str, dict[str, object]]:
        """Remove and return entries for ``keys`` (all entries when ``None``)."""

        targets = list(self._entries) if keys is None else [k for k in keys if k in self._entries]
        removed = {key: self._entries.pop(key) for key in targets}
        if removed:
            self._version += 1
        return removed
