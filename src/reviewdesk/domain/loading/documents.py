"""Tolerant access to the auxiliary documents stored beside each entity."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ValidationError

from reviewdesk.domain.errors import DocumentMalformed, DocumentMissing
from reviewdesk.domain.ports.metadata import DocumentNotFound, MetadataStoreError

from .schema import AnalysisDocument, DefinitionDocument, DetailsDocument, SampleDocument

if TYPE_CHECKING:
    from reviewdesk.domain.ports.metadata import MetadataStore

log = getLogger(__name__)

DEFINITION_DOCUMENT: Final[str] = "definition.json"
ANALYSIS_DOCUMENT: Final[str] = "definition_analysis.json"
SAMPLE_DOCUMENT: Final[str] = "definition_sample.json"
DETAILS_DOCUMENT: Final[str] = "definition_details.json"
OVERVIEW_DOCUMENT: Final[str] = "overview.md"
STALE_MARKER: Final[str] = ".stale"


def join_path(base: str, name: str) -> str:
    return f"{base.rstrip('/')}/{name}"


async def read_model[M: BaseModel](store: MetadataStore, path: str, model: type[M]) -> M:
    """Read and validate one JSON document.

    Raises ``DocumentMissing`` when the store has nothing at ``path`` (or cannot
    read it) and ``DocumentMalformed`` when the content does not validate.
    """

    try:
        text = await store.read_document(path)
    except DocumentNotFound as exc:
        raise DocumentMissing(path) from exc
    except MetadataStoreError as exc:
        log.warning(f"Could not read {path}: {exc}")
        raise DocumentMissing(path) from exc

    try:
        return model.model_validate_json(text)
    except ValidationError as exc:
        raise DocumentMalformed(path, f"{exc.error_count()} validation error(s)") from exc


class EntityDocuments:
    """Lazily loaded, memoised documents of one entity directory.

    Every accessor returns ``None`` instead of raising when its document is
    missing or malformed, so callers only deal with the fields they can fill.
    """

    def __init__(self, store: MetadataStore, folder_path: str) -> None:
        self.store = store
        self.folder_path = folder_path
        self._models: dict[str, BaseModel | None] = {}

    async def definition(self) -> DefinitionDocument | None:
        return await self._load(DEFINITION_DOCUMENT, DefinitionDocument)

    async def analysis(self) -> AnalysisDocument | None:
        return await self._load(ANALYSIS_DOCUMENT, AnalysisDocument)

    async def sample(self) -> SampleDocument | None:
        return await self._load(SAMPLE_DOCUMENT, SampleDocument)

    async def details(self) -> DetailsDocument | None:
        return await self._load(DETAILS_DOCUMENT, DetailsDocument)

    async def has(self, name: str) -> bool:
        try:
            await self.store.read_file_info(join_path(self.folder_path, name))
        except DocumentNotFound:
            return False
        except MetadataStoreError as exc:
            log.warning(f"Could not stat {name} in {self.folder_path}: {exc}")
            return False
        return True

    async def is_stale(self) -> bool:
        return await self.has(STALE_MARKER)

    async def modified_at(self, name: str) -> str | None:
        """Return the storage-level modification time of ``name`` as ISO text."""

        try:
            info = await self.store.read_file_info(join_path(self.folder_path, name))
        except MetadataStoreError:
            return None
        return info.modified.isoformat() if info.modified else None

    async def _load[M: BaseModel](self, name: str, model: type[M]) -> M | None:
        if name in self._models:
            return self._models[name]  # type: ignore[return-value]
        path = join_path(self.folder_path, name)
        result: M | None
        try:
            result = await read_model(self.store, path, model)
        except DocumentMissing:
            log.debug(f"No {name} in {self.folder_path}")
            result = None
        except DocumentMalformed as exc:
            log.warning(str(exc))
            result = None
        self._models[name] = result
        return result
