"""Port for fetching raw provider responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bs4 import BeautifulSoup


@dataclass(frozen=True)
class FetchResponse:
    """Status code and decoded body of a GET request."""

    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class FetchTransportPort(Protocol):
    """Async GET capability consumed by the resolvers.

    Implementations own timeouts and connection handling. Network errors
    are raised as ``TransportFailure``, never as library exceptions.
    """

    async def fetch_text(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> FetchResponse:
        """GET *url* and return status + body (any status code)."""
        ...

    async def fetch_document(
        self,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> BeautifulSoup:
        """GET *url* and return the parsed HTML document.

        Non-2xx responses raise ``TransportFailure``.
        """
        ...
