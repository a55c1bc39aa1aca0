"""Telebox catalog use case: browse, search, detail and link resolution.

Delegates remote access to the injected ``CatalogSourcePort`` and
``LinkResolverPort``; this layer owns classification, reference parsing,
record assembly and the degrade-don't-fail policy of the host surface.
"""

from __future__ import annotations

from urllib.parse import urlparse

import structlog

from telebox.domain.classifier import classify
from telebox.domain.entities.catalog import (
    CatalogEntry,
    CatalogGroup,
    CatalogHome,
    CatalogItem,
    EpisodeDetail,
    LinkResolution,
    MediaType,
    MovieDetail,
    SeriesDetail,
)
from telebox.domain.exceptions import InvalidReference, NoLinkFound, TeleboxError
from telebox.domain.ports.catalog_source import CatalogSourcePort
from telebox.domain.ports.credentials import CredentialsPort, require_token
from telebox.domain.ports.link_resolver import LinkResolverPort
from telebox.infrastructure.common.converters import format_size

log = structlog.get_logger(__name__)

HOME_GROUP_NAME = "Telebox files"
PLACEHOLDER_TITLE = "Telebox file"
DETAIL_PLOT = "A file from your Telebox cloud storage."


def extract_reference_id(reference: str) -> str | None:
    """Return the trailing path segment of *reference*, or ``None``.

    Accepts full item URLs (``https://host/file/abc``) as well as bare ids.
    """
    path = urlparse((reference or "").strip()).path.rstrip("/")
    if not path:
        return None
    segment = path.rsplit("/", 1)[-1]
    return segment or None


class TeleboxCatalogUseCase:
    """Host-facing catalog operations for one Telebox account.

    Every operation checks the API token first and raises
    ``MissingCredential`` before touching the network.
    """

    def __init__(
        self,
        source: CatalogSourcePort,
        link_resolver: LinkResolverPort,
        credentials: CredentialsPort,
        base_url: str,
    ) -> None:
        self._source = source
        self._links = link_resolver
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Record helpers
    # ------------------------------------------------------------------

    def _item_url(self, entry: CatalogEntry) -> str:
        section = "folder" if entry.is_folder else "file"
        return f"{self._base_url}/{section}/{entry.id}"

    def _page_url(self, reference: str, file_id: str) -> str:
        if urlparse(reference).scheme in ("http", "https"):
            return reference
        return f"{self._base_url}/file/{file_id}"

    def _to_item(self, entry: CatalogEntry) -> CatalogItem:
        media = classify(entry.name, entry.kind)
        return CatalogItem(
            title=entry.name,
            url=self._item_url(entry),
            type=media.type,
            season=media.season,
            episode=media.episode,
            size_bytes=entry.size_bytes,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def browse_root(self, page: int = 1) -> CatalogHome:
        """List the configured base folder as one labeled group."""
        require_token(self._credentials)

        listing = await self._source.list_entries(
            self._credentials.base_folder_id, page=page
        )
        items = [self._to_item(entry) for entry in listing.entries]
        log.info(
            "catalog_browse",
            page=page,
            count=len(items),
            has_more=listing.has_more,
        )
        return CatalogHome(
            groups=[CatalogGroup(name=HOME_GROUP_NAME, items=items)],
            has_more=listing.has_more,
        )

    async def search(self, query: str) -> list[CatalogItem]:
        """Search the base folder; results are returned flat."""
        require_token(self._credentials)

        if not query.strip():
            return []

        listing = await self._source.list_entries(
            self._credentials.base_folder_id, query=query.strip()
        )
        items = [self._to_item(entry) for entry in listing.entries]
        log.info("catalog_search", query=query, count=len(items))
        return items

    async def load_detail(self, reference: str) -> MovieDetail | SeriesDetail:
        """Load a single item as a movie or a one-episode series.

        Raises ``InvalidReference`` when *reference* has no path segment.
        Metadata failures degrade to a placeholder movie record.
        """
        require_token(self._credentials)

        file_id = extract_reference_id(reference)
        if file_id is None:
            raise InvalidReference(f"No file identifier in reference {reference!r}")

        try:
            info = await self._source.get_file_info(file_id)
        except TeleboxError:
            log.warning("catalog_detail_degraded", file_id=file_id, exc_info=True)
            return MovieDetail(
                title=PLACEHOLDER_TITLE,
                url=reference,
                data_url=reference,
                plot=DETAIL_PLOT,
            )

        media = classify(info.name)
        caption = format_size(info.size_bytes)

        if media.type is MediaType.TV_SERIES:
            return SeriesDetail(
                title=info.name,
                url=reference,
                episodes=[
                    EpisodeDetail(
                        name=info.name,
                        data_url=reference,
                        season=media.season,
                        episode=media.episode,
                    )
                ],
                size_caption=caption,
                plot=DETAIL_PLOT,
            )

        return MovieDetail(
            title=info.name,
            url=reference,
            data_url=reference,
            size_caption=caption,
            plot=DETAIL_PLOT,
        )

    async def resolve_links(self, reference: str) -> LinkResolution:
        """Resolve at most one playable link (never subtitles).

        Unresolvable references and exhausted tiers yield an empty result.
        """
        require_token(self._credentials)

        file_id = extract_reference_id(reference)
        if file_id is None:
            log.info("catalog_links_invalid_reference", reference=reference)
            return LinkResolution()

        try:
            link = await self._links.resolve(
                file_id, self._page_url(reference, file_id)
            )
        except NoLinkFound:
            return LinkResolution()

        return LinkResolution(links=[link])
