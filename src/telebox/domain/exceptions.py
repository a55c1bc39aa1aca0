"""Catalog and link resolution exceptions."""

from __future__ import annotations


class TeleboxError(Exception):
    """Base error for Telebox domain/use cases."""


class MissingCredential(TeleboxError):
    """Raised when no API token is configured. No fetch is attempted."""


class TransportFailure(TeleboxError):
    """Raised on network errors or non-2xx responses."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponse(TeleboxError):
    """Raised when a response body yields nothing usable."""


class InvalidReference(TeleboxError):
    """Raised when a detail/link reference carries no file identifier."""


class NoLinkFound(TeleboxError):
    """Raised when every link resolution tier came up empty."""
