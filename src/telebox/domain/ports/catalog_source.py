"""Port for listing folders and looking up file metadata."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from telebox.domain.entities.catalog import FileInfo, ListingPage


@runtime_checkable
class CatalogSourcePort(Protocol):
    """Retrieves listings and file metadata from the provider."""

    async def list_entries(
        self,
        parent_id: str,
        query: str | None = None,
        page: int = 1,
    ) -> ListingPage:
        """List (or search) the entries below *parent_id*.

        Returns an empty page when every source failed.
        """
        ...

    async def get_file_info(self, file_id: str) -> FileInfo:
        """Fetch name and size of a single file.

        Raises ``TransportFailure`` when the metadata endpoint is unreachable.
        """
        ...
