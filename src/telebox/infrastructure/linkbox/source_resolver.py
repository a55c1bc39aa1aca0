"""Linkbox listing/search/file-info source with HTML fallback.

Listing goes to the JSON API first.  Transport errors, non-2xx statuses and
bodies that normalize to nothing all fall back to scraping the "my files"
page on the first page of a plain listing.  The web page can neither search
nor paginate, so a failed search or a failed later page yields an empty page.
"""

from __future__ import annotations

from urllib.parse import urlencode

import structlog

from telebox.domain.entities.catalog import CatalogEntry, FileInfo, ListingPage
from telebox.domain.exceptions import MalformedResponse, TransportFailure
from telebox.domain.ports.credentials import CredentialsPort, require_token
from telebox.domain.ports.transport import FetchTransportPort

from .constants import (
    DEFAULT_BASE_URL,
    FILE_INFO_PATH,
    JSON_HEADERS,
    LIST_PATH,
    MY_FILES_PATH,
    PAGE_SIZE,
)
from .normalizer import parse_file_info, parse_listing_html, parse_listing_json

log = structlog.get_logger(__name__)


def _page(entries: list[CatalogEntry]) -> ListingPage:
    # Heuristic: a full page suggests more (cannot tell "exactly 50 left").
    return ListingPage(entries=entries, has_more=len(entries) == PAGE_SIZE)


class LinkboxSourceResolver:
    """Resolves folder listings, searches and file metadata."""

    def __init__(
        self,
        transport: FetchTransportPort,
        credentials: CredentialsPort,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._transport = transport
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")

    async def list_entries(
        self,
        parent_id: str,
        query: str | None = None,
        page: int = 1,
    ) -> ListingPage:
        """List (or search) entries below *parent_id*.

        Raises ``MissingCredential`` without any network call when no token
        is configured.  Never raises for remote failures.
        """
        token = require_token(self._credentials)

        params: dict[str, str | int] = {"token": token, "pid": parent_id}
        if query:
            params["name"] = query
        params["pageNo"] = page
        params["pageSize"] = PAGE_SIZE

        try:
            entries = await self._fetch_api_listing(params)
        except (TransportFailure, MalformedResponse) as exc:
            if query:
                log.info(
                    "linkbox_search_unavailable",
                    parent_id=parent_id,
                    page=page,
                    reason=str(exc),
                )
                return ListingPage()

            # The "my files" page only ever shows the first page
            if page > 1:
                log.info(
                    "linkbox_listing_exhausted",
                    parent_id=parent_id,
                    page=page,
                    reason=str(exc),
                )
                return ListingPage()

            log.info(
                "linkbox_listing_fallback",
                parent_id=parent_id,
                page=page,
                reason=str(exc),
            )
            return _page(await self._scrape_my_files())

        log.debug(
            "linkbox_listing_fetched",
            parent_id=parent_id,
            page=page,
            count=len(entries),
        )
        return _page(entries)

    async def _fetch_api_listing(
        self, params: dict[str, str | int]
    ) -> list[CatalogEntry]:
        url = f"{self._base_url}{LIST_PATH}?{urlencode(params)}"
        resp = await self._transport.fetch_text(url, headers=JSON_HEADERS)
        if not resp.ok:
            raise TransportFailure(
                f"Listing API returned HTTP {resp.status}", status=resp.status
            )

        entries = parse_listing_json(resp.body)
        if not entries:
            raise MalformedResponse("Listing API body yielded no entries")
        return entries

    async def _scrape_my_files(self) -> list[CatalogEntry]:
        url = f"{self._base_url}{MY_FILES_PATH}"
        try:
            document = await self._transport.fetch_document(url)
        except TransportFailure as exc:
            log.warning("linkbox_scrape_failed", url=url, reason=str(exc))
            return []

        entries = parse_listing_html(document)
        log.debug("linkbox_scrape_fetched", count=len(entries))
        return entries

    async def get_file_info(self, file_id: str) -> FileInfo:
        """Fetch name and size of a single file.

        Raises ``TransportFailure`` for network errors and non-2xx statuses.
        A body without ``name`` yields the unknown-file placeholder.
        """
        token = require_token(self._credentials)
        query = urlencode({"token": token, "itemId": file_id})
        url = f"{self._base_url}{FILE_INFO_PATH}?{query}"

        resp = await self._transport.fetch_text(url, headers=JSON_HEADERS)
        if not resp.ok:
            log.warning(
                "linkbox_file_info_http_error",
                file_id=file_id,
                status=resp.status,
            )
            raise TransportFailure(
                f"File info API returned HTTP {resp.status}", status=resp.status
            )
        return parse_file_info(resp.body)
