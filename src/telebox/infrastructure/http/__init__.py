"""HTTP transport adapters."""

from __future__ import annotations

from .transport import HttpxFetchTransport

__all__ = ["HttpxFetchTransport"]
