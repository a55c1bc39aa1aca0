"""Port for resolving file identifiers to playable URLs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from telebox.domain.entities.catalog import ResolvedLink


@runtime_checkable
class LinkResolverPort(Protocol):
    """Resolves a file to a direct stream URL using tiered fallbacks."""

    async def resolve(self, file_id: str, loaded_url: str) -> ResolvedLink:
        """Resolve *file_id* (whose item page is *loaded_url*).

        Raises ``NoLinkFound`` once every tier is exhausted.
        """
        ...
