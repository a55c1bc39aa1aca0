"""Linkbox/Telebox provider adapters (JSON API with HTML fallback)."""

from __future__ import annotations

from .link_resolver import LinkboxLinkResolver
from .source_resolver import LinkboxSourceResolver

__all__ = ["LinkboxLinkResolver", "LinkboxSourceResolver"]
