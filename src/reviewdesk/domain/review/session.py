"""Review session: generations, overlay, filter and subscribers in one place.

The session is single-writer. Every state change happens in one of the event
handlers (``reload``, ``on_edit``, ``on_bulk_edit``, ``set_review_filter``,
``discard``, ``commit``) and ends with subscribers receiving either the whole
displayed row set or the minimal patches against what they saw last.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from reviewdesk.domain.analytics import enrich_dashboards
from reviewdesk.domain.errors import SourceUnavailable
from reviewdesk.domain.loading import DEFAULT_PORTAL_HOST, extract_domain, load_rows
from reviewdesk.domain.loading.documents import ANALYSIS_DOCUMENT, join_path
from reviewdesk.domain.model import DashboardDetails, ResourceType, ReviewMode
from reviewdesk.domain.ports.metadata import DocumentNotFound, MetadataStoreError
from reviewdesk.domain.time_windows import utcnow

from .commit import AnalysisDocumentUpdate, build_analysis_document
from .filtering import ReviewFilter
from .merge import apply_overlay
from .overlay import Edit, EditOverlay
from .reconcile import diff_rows

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from typing import Any

    from reviewdesk.domain.model import Row
    from reviewdesk.domain.ports.analytics import AnalyticsFeed
    from reviewdesk.domain.ports.metadata import DocumentWriter, MetadataStore
    from reviewdesk.domain.time_windows import Clock

    from .reconcile import RowPatch

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReviewSource:
    """Where a session loads from."""

    root: str
    resource_type: ResourceType
    domain: str | None = None

    @property
    def analytics_domain(self) -> str | None:
        return self.domain or extract_domain(self.root)


@dataclass(frozen=True, slots=True)
class RowsReplaced:
    generation: int
    rows: tuple[Row, ...]


@dataclass(frozen=True, slots=True)
class RowsPatched:
    generation: int
    patches: tuple[RowPatch, ...]


@dataclass(frozen=True, slots=True)
class LoadFailed:
    generation: int
    error: SourceUnavailable


type SessionEvent = RowsReplaced | RowsPatched | LoadFailed
Subscriber = Callable[[SessionEvent], None]


def _carry_analytics(rows: Sequence[Row], previous: Sequence[Row]) -> list[Row]:
    """Keep known analytics on reloaded dashboards until fresh ones arrive."""

    known = {
        row.key: row.details.analytics
        for row in previous
        if isinstance(row.details, DashboardDetails) and row.details.analytics is not None
    }
    if not known:
        return list(rows)
    carried: list[Row] = []
    for row in rows:
        details = row.details
        analytics = known.get(row.key)
        if isinstance(details, DashboardDetails) and details.analytics is None and analytics:
            row = replace(row, details=replace(details, analytics=analytics))
        carried.append(row)
    return carried


class ReviewSession:
    """Stateful review of one source with an edit overlay and subscribers."""

    def __init__(
        self,
        source: ReviewSource,
        *,
        store: MetadataStore,
        feed: AnalyticsFeed | None = None,
        overlay: EditOverlay | None = None,
        portal_host: str = DEFAULT_PORTAL_HOST,
        clock: Clock = utcnow,
    ) -> None:
        self._source = source
        self._store = store
        self._feed = feed
        self._portal_host = portal_host
        self._clock = clock
        self.overlay = overlay if overlay is not None else EditOverlay()
        self._filter = ReviewFilter()

        self._generation = 0
        self._canonical: list[Row] = []
        self._revision = 0
        self._merged_cache: tuple[tuple[int, int], list[Row]] | None = None
        self._displayed: list[Row] = []
        self._replace_on_next_load = True
        self._error: SourceUnavailable | None = None
        self._subscribers: list[Subscriber] = []

    # --- read side --------------------------------------------------------

    @property
    def source(self) -> ReviewSource:
        return self._source

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def error(self) -> SourceUnavailable | None:
        return self._error

    @property
    def review_mode(self) -> ReviewMode:
        return self._filter.mode

    def merged_rows(self) -> list[Row]:
        """Rows as currently displayed: canonical, merged, and filtered."""

        return list(self._displayed)

    def canonical_rows(self) -> list[Row]:
        return list(self._canonical)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # --- edits and filter ---------------------------------------------------

    def on_edit(self, key: str, field: str, value: object) -> list[RowPatch]:
        self.overlay.set(key, field, value)
        return self._reconcile(keys={key})

    def on_bulk_edit(self, edits: Iterable[Edit | tuple[str, str, object]]) -> list[RowPatch]:
        batch = [edit if isinstance(edit, Edit) else Edit(*edit) for edit in edits]
        affected = self.overlay.apply_batch(batch)
        if not affected:
            return []
        return self._reconcile(keys=affected)

    def set_review_filter(self, mode: ReviewMode | str) -> list[RowPatch]:
        if not self._filter.set_mode(mode):
            return []
        log.debug(f"Review filter set to {self._filter.mode}")
        return self._reconcile()

    def discard(self, keys: Iterable[str] | None = None) -> list[RowPatch]:
        """Drop uncommitted edits and show the canonical values again."""

        removed = self.overlay.discard(keys)
        if not removed:
            return []
        return self._reconcile(keys=removed)

    # --- loading ------------------------------------------------------------

    async def reload(self) -> bool:
        """Start a new generation; return whether its rows were applied.

        A generation superseded by a later ``reload`` or ``switch_source``
        while its load was in flight is dropped on arrival.
        """

        self._generation += 1
        generation = self._generation
        source = self._source
        log.info(f"Loading {source.resource_type} rows from {source.root} (generation {generation})")

        try:
            rows = await load_rows(
                self._store, source.root, source.resource_type, portal_host=self._portal_host
            )
        except SourceUnavailable as exc:
            if generation != self._generation:
                return False
            self._error = exc
            log.error(f"Load of generation {generation} failed: {exc}")
            if self._replace_on_next_load:
                self._set_canonical([])
                self._displayed = []
            self._notify(LoadFailed(generation, exc))
            return False

        if generation != self._generation:
            log.debug(f"Discarding rows of superseded generation {generation}")
            return False

        self._error = None
        domain = self._enrichment_domain(source)
        if self._replace_on_next_load:
            self._set_canonical(rows)
            self._displayed = self._compute_display()
            self._replace_on_next_load = False
            self._notify(RowsReplaced(generation, tuple(self._displayed)))
        elif domain is not None:
            self._set_canonical(_carry_analytics(rows, self._canonical))
            self._reconcile()
        else:
            self._set_canonical(rows)
            self._reconcile()

        if domain is not None:
            await self._enrich(generation, domain, rows)
        return True

    async def switch_source(self, source: ReviewSource) -> bool:
        """Point the session at another root or resource type and load it."""

        self._source = source
        self._generation += 1
        self._replace_on_next_load = True
        self._error = None
        return await self.reload()

    def _enrichment_domain(self, source: ReviewSource) -> str | None:
        if self._feed is None or source.resource_type is not ResourceType.DASHBOARD:
            return None
        domain = source.analytics_domain
        if domain is None:
            log.info(f"No domain detected for {source.root}, skipping analytics")
        return domain

    async def _enrich(self, generation: int, domain: str, rows: Sequence[Row]) -> None:
        feed = self._feed
        if feed is None:
            return
        enriched = await enrich_dashboards(rows, feed=feed, domain=domain, clock=self._clock)
        if generation != self._generation:
            log.debug(f"Discarding analytics of superseded generation {generation}")
            return
        self._set_canonical(enriched)
        self._reconcile()

    # --- commit -------------------------------------------------------------

    async def commit(
        self,
        writer: DocumentWriter,
        keys: Iterable[str] | None = None,
    ) -> list[AnalysisDocumentUpdate]:
        """Hand overlay entries to ``writer`` as analysis documents, then reload.

        Entries are cleared one by one as ``writer`` accepts them; an entry
        whose key has no loaded row is kept.
        """

        entries = self.overlay.snapshot()
        targets = list(entries) if keys is None else [key for key in keys if key in entries]
        rows_by_key = {row.key: row for row in self._canonical}
        updates: list[AnalysisDocumentUpdate] = []

        try:
            for key in targets:
                row = rows_by_key.get(key)
                if row is None:
                    log.warning(f"No loaded row for edited key {key!r}, keeping its edits")
                    continue
                path = join_path(row.folder_path, ANALYSIS_DOCUMENT)
                existing = await self._read_existing_document(path)
                update = AnalysisDocumentUpdate(
                    key=key, path=path, document=build_analysis_document(existing, entries[key])
                )
                await writer(update.path, update.render())
                self.overlay.pop([key])
                updates.append(update)
        finally:
            if updates:
                log.info(f"Committed edits of {len(updates)} row(s)")
                await self.reload()
        return updates

    async def _read_existing_document(self, path: str) -> dict[str, Any] | None:
        try:
            text = await self._store.read_document(path)
        except DocumentNotFound:
            return None
        except MetadataStoreError as exc:
            log.warning(f"Could not read {path}, writing a fresh document: {exc}")
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            log.warning(f"Malformed {path}, writing a fresh document: {exc}")
            return None
        return payload if isinstance(payload, dict) else None

    # --- internals ----------------------------------------------------------

    def _set_canonical(self, rows: Sequence[Row]) -> None:
        self._canonical = list(rows)
        self._revision += 1

    def _merged(self) -> list[Row]:
        token = (self._revision, self.overlay.version)
        if self._merged_cache is None or self._merged_cache[0] != token:
            self._merged_cache = (token, apply_overlay(self._canonical, self.overlay))
        return self._merged_cache[1]

    def _compute_display(self) -> list[Row]:
        return self._filter.apply(self._merged(), self.overlay, revision=self._revision)

    def _reconcile(self, keys: Iterable[str] | None = None) -> list[RowPatch]:
        current = self._compute_display()
        patches = diff_rows(self._displayed, current, keys=keys)
        self._displayed = current
        if patches:
            self._notify(RowsPatched(self._generation, tuple(patches)))
        return patches

    def _notify(self, event: SessionEvent) -> None:
        for callback in list(self._subscribers):
            callback(event)
