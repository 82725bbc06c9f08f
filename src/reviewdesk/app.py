"""Application wiring for review sessions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from reviewdesk.adapters.analytics import AnalyticsFeedClient
from reviewdesk.adapters.filesystem import LocalMetadataStore
from reviewdesk.config import get_analytics_config, get_review_config, is_analytics_configured
from reviewdesk.domain.model import ResourceType
from reviewdesk.domain.review import ReviewSession, ReviewSource, portal_resources

if TYPE_CHECKING:
    from reviewdesk.config import ReviewConfig
    from reviewdesk.domain.ports.analytics import AnalyticsFeed
    from reviewdesk.domain.ports.metadata import MetadataStore
    from reviewdesk.domain.review import EditOverlay, PortalResource

log = getLogger(__name__)


def build_analytics_feed() -> AnalyticsFeed | None:
    """Return the HTTP page-view feed, or ``None`` when it is not configured."""

    if not is_analytics_configured():
        log.info("Analytics feed not configured, dashboards load without analytics")
        return None
    return AnalyticsFeedClient(config=get_analytics_config())


async def open_review_session(
    root: str,
    resource_type: ResourceType | str,
    *,
    domain: str | None = None,
    store: MetadataStore | None = None,
    feed: AnalyticsFeed | None = None,
    overlay: EditOverlay | None = None,
    review_config: ReviewConfig | None = None,
    load_env: bool = True,
) -> ReviewSession:
    """Create a session for ``root`` with default adapters and load its first generation."""

    if load_env:
        load_dotenv()
    config = review_config or get_review_config()
    source = ReviewSource(root=root, resource_type=ResourceType(resource_type), domain=domain)

    effective_feed = feed
    if effective_feed is None and source.resource_type is ResourceType.DASHBOARD:
        effective_feed = build_analytics_feed()

    session = ReviewSession(
        source,
        store=store or LocalMetadataStore(),
        feed=effective_feed,
        overlay=overlay,
        portal_host=config.portal_host,
    )
    log.info(f"Opening review of {source.resource_type} rows at {root}")
    await session.reload()
    return session


def export_portal_resources(session: ReviewSession) -> list[PortalResource]:
    """Sitemap entries for the rows currently loaded in ``session``."""

    domain = session.source.analytics_domain
    if domain is None:
        log.warning(f"No domain detected for {session.source.root}, nothing to export")
        return []
    return portal_resources(
        session.canonical_rows(), domain=domain, resource_type=session.source.resource_type
    )
