from .catalog import (
    CatalogEntry,
    CatalogGroup,
    CatalogHome,
    CatalogItem,
    EntryKind,
    EpisodeDetail,
    FileInfo,
    LinkQuality,
    LinkResolution,
    ListingPage,
    MediaClassification,
    MediaType,
    MovieDetail,
    ResolvedLink,
    SeriesDetail,
)

__all__ = [
    "CatalogEntry",
    "CatalogGroup",
    "CatalogHome",
    "CatalogItem",
    "EntryKind",
    "EpisodeDetail",
    "FileInfo",
    "LinkQuality",
    "LinkResolution",
    "ListingPage",
    "MediaClassification",
    "MediaType",
    "MovieDetail",
    "ResolvedLink",
    "SeriesDetail",
]
