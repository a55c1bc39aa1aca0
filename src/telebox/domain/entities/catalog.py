"""Domain entities for the Telebox catalog.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class EntryKind(str, Enum):
    """Whether a listing entry can be browsed further or loaded directly."""

    FOLDER = "folder"
    FILE = "file"


class MediaType(str, Enum):
    """Host-facing media type of a catalog item."""

    MOVIE = "movie"
    TV_SERIES = "series"


class LinkQuality(IntEnum):
    """Link quality levels. The provider exposes no quality metadata."""

    UNKNOWN = 0


@dataclass(frozen=True)
class CatalogEntry:
    """A normalized folder or file record from a listing."""

    id: str
    name: str
    kind: EntryKind
    size_bytes: int | None = None

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER


@dataclass(frozen=True)
class ListingPage:
    """One page of catalog entries from the source resolver."""

    entries: list[CatalogEntry] = field(default_factory=list)
    has_more: bool = False


@dataclass(frozen=True)
class FileInfo:
    """Single-file metadata (name plus optional size)."""

    name: str
    size_bytes: int | None = None


@dataclass(frozen=True)
class MediaClassification:
    """Derived media type of an entry name; recomputed on demand."""

    type: MediaType
    season: int | None = None
    episode: int | None = None


@dataclass(frozen=True)
class ResolvedLink:
    """A direct, playable stream URL."""

    url: str  # Absolute URL
    quality: LinkQuality = LinkQuality.UNKNOWN
    is_segmented: bool = False  # Provider never serves HLS/DASH manifests


@dataclass(frozen=True)
class CatalogItem:
    """Host-agnostic catalog record (browse and search results)."""

    title: str
    url: str
    type: MediaType
    season: int | None = None
    episode: int | None = None
    size_bytes: int | None = None


@dataclass(frozen=True)
class CatalogGroup:
    """A labeled list of catalog items."""

    name: str
    items: list[CatalogItem] = field(default_factory=list)


@dataclass(frozen=True)
class CatalogHome:
    """Grouped browse result with a more-pages flag."""

    groups: list[CatalogGroup] = field(default_factory=list)
    has_more: bool = False


@dataclass(frozen=True)
class MovieDetail:
    """Detail record for a single loadable item."""

    title: str
    url: str
    data_url: str  # Reference handed back to link resolution
    size_caption: str = ""
    plot: str = ""


@dataclass(frozen=True)
class EpisodeDetail:
    """One episode of a series detail record."""

    name: str
    data_url: str
    season: int | None = None
    episode: int | None = None


@dataclass(frozen=True)
class SeriesDetail:
    """Detail record for a file classified as an episode."""

    title: str
    url: str
    episodes: list[EpisodeDetail] = field(default_factory=list)
    size_caption: str = ""
    plot: str = ""


@dataclass(frozen=True)
class LinkResolution:
    """Outcome of link resolution: at most one link, never subtitles."""

    links: list[ResolvedLink] = field(default_factory=list)
    subtitles: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.links)
