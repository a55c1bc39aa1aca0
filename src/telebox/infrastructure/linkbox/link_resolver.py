"""Linkbox stream link resolver: API download link, then page scrape.

Tier 1:
    GET /api/open/get_download_url?token=...&itemId=...
    → ``download_link`` anywhere in the JSON body

Tier 2:
    GET <item page> → download anchor/button, ``href`` first,
    ``data-download-url`` second

Each tier runs exactly once.  The provider serves plain progressive files,
so every link has unknown quality and is never segmented.
"""

from __future__ import annotations

from urllib.parse import urlencode, urljoin

import structlog
from bs4 import BeautifulSoup

from telebox.domain.entities.catalog import LinkQuality, ResolvedLink
from telebox.domain.exceptions import NoLinkFound, TransportFailure
from telebox.domain.ports.credentials import CredentialsPort, require_token
from telebox.domain.ports.transport import FetchTransportPort
from telebox.infrastructure.common.html_selectors import first_attr

from .constants import (
    DEFAULT_BASE_URL,
    DOWNLOAD_ATTRS,
    DOWNLOAD_PATH,
    DOWNLOAD_SELECTORS,
    JSON_HEADERS,
)
from .normalizer import extract_download_link

log = structlog.get_logger(__name__)

_IGNORED_HREFS = ("#", "javascript:")


def find_download_url(document: BeautifulSoup, page_url: str) -> str | None:
    """Find the first download URL on an item page.

    Selector strategies are tried in order; within each, every match is
    checked for ``href`` then ``data-download-url``.
    """
    for selector in DOWNLOAD_SELECTORS:
        for element in document.select(selector):
            for attr in DOWNLOAD_ATTRS:
                value = first_attr(element, attr)
                if not value or value.lower().startswith(_IGNORED_HREFS):
                    continue
                return urljoin(page_url, value)
    return None


class LinkboxLinkResolver:
    """Resolves a Linkbox file id to a direct download URL."""

    def __init__(
        self,
        transport: FetchTransportPort,
        credentials: CredentialsPort,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._transport = transport
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "linkbox"

    async def resolve(self, file_id: str, loaded_url: str) -> ResolvedLink:
        """Resolve *file_id* to a playable link.

        Raises ``MissingCredential`` before any fetch when no token is
        configured, ``NoLinkFound`` when both tiers came up empty.
        """
        token = require_token(self._credentials)

        url = await self._from_api(file_id, token)
        if url is None:
            url = await self._from_page(file_id, loaded_url)
        if url is None:
            log.info("linkbox_no_link_found", file_id=file_id)
            raise NoLinkFound(f"No download link for file {file_id}")

        return ResolvedLink(url=url, quality=LinkQuality.UNKNOWN, is_segmented=False)

    async def _from_api(self, file_id: str, token: str) -> str | None:
        query = urlencode({"token": token, "itemId": file_id})
        api_url = f"{self._base_url}{DOWNLOAD_PATH}?{query}"

        try:
            resp = await self._transport.fetch_text(api_url, headers=JSON_HEADERS)
        except TransportFailure:
            log.warning("linkbox_download_api_failed", file_id=file_id)
            return None

        if not resp.ok:
            log.warning(
                "linkbox_download_api_http_error",
                file_id=file_id,
                status=resp.status,
            )
            return None

        link = extract_download_link(resp.body)
        if link is None:
            log.warning("linkbox_download_link_missing", file_id=file_id)
            return None

        log.debug("linkbox_link_resolved", file_id=file_id, tier="api")
        return urljoin(self._base_url + "/", link)

    async def _from_page(self, file_id: str, page_url: str) -> str | None:
        try:
            document = await self._transport.fetch_document(page_url)
        except TransportFailure:
            log.warning("linkbox_item_page_failed", file_id=file_id, url=page_url)
            return None

        link = find_download_url(document, page_url)
        if link is None:
            log.warning("linkbox_item_page_no_download", file_id=file_id)
            return None

        log.debug("linkbox_link_resolved", file_id=file_id, tier="page")
        return link
