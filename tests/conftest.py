"""Shared test fixtures for the Telebox catalog test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlparse

import pytest
from bs4 import BeautifulSoup

from telebox.domain.exceptions import TransportFailure
from telebox.domain.ports.transport import FetchResponse
from telebox.infrastructure.common.html_selectors import parse_html
from telebox.infrastructure.config.schema import LinkboxConfig

BASE_URL = "https://www.linkbox.to"
TOKEN = "tok-123"


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


@dataclass
class FakeTransport:
    """In-memory FetchTransportPort keyed by URL path (query ignored).

    Values are ``FetchResponse``/HTML strings, or exceptions to raise.
    Every call is recorded in ``calls`` as ``(method, url)``.
    """

    texts: dict[str, FetchResponse | Exception] = field(default_factory=dict)
    documents: dict[str, str | Exception] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def fetch_text(
        self, url: str, headers: dict[str, str] | None = None
    ) -> FetchResponse:
        self.calls.append(("text", url))
        value = self.texts.get(urlparse(url).path)
        if value is None:
            raise TransportFailure(f"no fake route for {url}")
        if isinstance(value, Exception):
            raise value
        return value

    async def fetch_document(
        self, url: str, headers: dict[str, str] | None = None
    ) -> BeautifulSoup:
        self.calls.append(("document", url))
        value = self.documents.get(urlparse(url).path)
        if value is None:
            raise TransportFailure(f"no fake route for {url}")
        if isinstance(value, Exception):
            raise value
        return parse_html(value)

    def paths(self) -> list[str]:
        return [urlparse(url).path for _, url in self.calls]

    def params(self, index: int = 0) -> dict[str, list[str]]:
        return parse_qs(urlparse(self.calls[index][1]).query)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@pytest.fixture()
def credentials() -> LinkboxConfig:
    return LinkboxConfig(api_token=TOKEN, base_folder_id="0", base_url=BASE_URL)


@pytest.fixture()
def no_credentials() -> LinkboxConfig:
    return LinkboxConfig(api_token=None, base_url=BASE_URL)
