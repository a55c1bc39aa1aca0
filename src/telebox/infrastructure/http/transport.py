"""httpx-backed implementation of the fetch transport port."""

from __future__ import annotations

import httpx
import structlog
from bs4 import BeautifulSoup

from telebox.domain.exceptions import TransportFailure
from telebox.domain.ports.transport import FetchResponse
from telebox.infrastructure.common.html_selectors import parse_html

log = structlog.get_logger(__name__)


class HttpxFetchTransport:
    """Performs single GET requests through a shared ``httpx.AsyncClient``.

    The client (timeouts, User-Agent, redirects) is owned by the caller.
    Each request is attempted exactly once.  ``httpx.HTTPError`` and URLs
    httpx refuses to parse are wrapped in ``TransportFailure``.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def _get(self, url: str, headers: dict[str, str] | None) -> httpx.Response:
        try:
            return await self._http.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            log.warning("transport_timeout", url=_redact(url))
            raise TransportFailure(f"Timeout fetching {_redact(url)}") from exc
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            log.warning("transport_error", url=_redact(url), error=str(exc))
            raise TransportFailure(f"Error fetching {_redact(url)}: {exc}") from exc

    async def fetch_text(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> FetchResponse:
        resp = await self._get(url, headers)
        return FetchResponse(status=resp.status_code, body=resp.text)

    async def fetch_document(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> BeautifulSoup:
        resp = await self._get(url, headers)
        if not 200 <= resp.status_code < 300:
            log.warning(
                "transport_http_error",
                url=_redact(url),
                status=resp.status_code,
            )
            raise TransportFailure(
                f"HTTP {resp.status_code} for {_redact(url)}",
                status=resp.status_code,
            )
        return parse_html(resp.text)


def _redact(url: str) -> str:
    """Strip the query string so API tokens never reach the logs."""
    return url.split("?", 1)[0]
