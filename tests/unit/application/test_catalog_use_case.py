"""Tests for TeleboxCatalogUseCase."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from telebox.application.use_cases.catalog import (
    DETAIL_PLOT,
    HOME_GROUP_NAME,
    PLACEHOLDER_TITLE,
    TeleboxCatalogUseCase,
    extract_reference_id,
)
from telebox.domain.entities.catalog import (
    CatalogEntry,
    EntryKind,
    FileInfo,
    LinkQuality,
    ListingPage,
    MediaType,
    MovieDetail,
    ResolvedLink,
    SeriesDetail,
)
from telebox.domain.exceptions import (
    InvalidReference,
    MalformedResponse,
    MissingCredential,
    NoLinkFound,
    TransportFailure,
)
from telebox.infrastructure.config.schema import LinkboxConfig

_BASE = "https://www.linkbox.to"

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_ENTRIES = [
    CatalogEntry(id="101", name="Breaking.Bad.S01E01.mkv", kind=EntryKind.FILE),
    CatalogEntry(id="f-7", name="Documentaries", kind=EntryKind.FOLDER),
    CatalogEntry(
        id="103", name="Inception.2010.mp4", kind=EntryKind.FILE, size_bytes=2048
    ),
]


@pytest.fixture()
def mock_source() -> AsyncMock:
    source = AsyncMock()
    source.list_entries = AsyncMock(
        return_value=ListingPage(entries=_ENTRIES, has_more=False)
    )
    source.get_file_info = AsyncMock(
        return_value=FileInfo(name="Inception.2010.mp4", size_bytes=1536)
    )
    return source


@pytest.fixture()
def mock_resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.resolve = AsyncMock(
        return_value=ResolvedLink(url="https://cdn.linkbox.to/v/103.mp4")
    )
    return resolver


@pytest.fixture()
def config() -> LinkboxConfig:
    return LinkboxConfig(api_token="tok-123", base_folder_id="root-9", base_url=_BASE)


@pytest.fixture()
def use_case(
    mock_source: AsyncMock, mock_resolver: AsyncMock, config: LinkboxConfig
) -> TeleboxCatalogUseCase:
    return TeleboxCatalogUseCase(mock_source, mock_resolver, config, _BASE)


@pytest.fixture()
def tokenless(
    mock_source: AsyncMock, mock_resolver: AsyncMock
) -> TeleboxCatalogUseCase:
    return TeleboxCatalogUseCase(
        mock_source, mock_resolver, LinkboxConfig(api_token=None), _BASE
    )


# ---------------------------------------------------------------------------
# Reference parsing
# ---------------------------------------------------------------------------


class TestExtractReferenceId:
    @pytest.mark.parametrize(
        ("reference", "expected"),
        [
            ("https://www.linkbox.to/file/abc", "abc"),
            ("https://www.linkbox.to/file/abc/", "abc"),
            ("https://www.linkbox.to/folder/f-7?x=1", "f-7"),
            ("abc", "abc"),
            ("", None),
            ("   ", None),
            ("https://www.linkbox.to", None),
            ("https://www.linkbox.to/", None),
        ],
    )
    def test_trailing_segment(self, reference: str, expected: str | None) -> None:
        assert extract_reference_id(reference) == expected


# ---------------------------------------------------------------------------
# Browse
# ---------------------------------------------------------------------------


class TestBrowseRoot:
    async def test_single_group_in_order(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        home = await use_case.browse_root()

        assert len(home.groups) == 1
        group = home.groups[0]
        assert group.name == HOME_GROUP_NAME
        assert [i.title for i in group.items] == [e.name for e in _ENTRIES]
        assert home.has_more is False
        mock_source.list_entries.assert_awaited_once_with("root-9", page=1)

    async def test_item_classification_and_urls(
        self, use_case: TeleboxCatalogUseCase
    ) -> None:
        items = (await use_case.browse_root()).groups[0].items

        episode, folder, movie = items
        assert episode.type is MediaType.TV_SERIES
        assert (episode.season, episode.episode) == (1, 1)
        assert episode.url == f"{_BASE}/file/101"

        assert folder.type is MediaType.TV_SERIES
        assert folder.season is None
        assert folder.url == f"{_BASE}/folder/f-7"

        assert movie.type is MediaType.MOVIE
        assert movie.size_bytes == 2048

    async def test_page_and_has_more_forwarded(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        mock_source.list_entries.return_value = ListingPage(
            entries=_ENTRIES, has_more=True
        )

        home = await use_case.browse_root(page=3)

        assert home.has_more is True
        mock_source.list_entries.assert_awaited_once_with("root-9", page=3)

    async def test_empty_listing_still_one_group(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        mock_source.list_entries.return_value = ListingPage()

        home = await use_case.browse_root()

        assert len(home.groups) == 1
        assert home.groups[0].items == []

    async def test_missing_token(
        self, tokenless: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        with pytest.raises(MissingCredential):
            await tokenless.browse_root()
        mock_source.list_entries.assert_not_awaited()


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TestSearch:
    async def test_flat_results(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        items = await use_case.search("  inception ")

        assert [i.title for i in items] == [e.name for e in _ENTRIES]
        mock_source.list_entries.assert_awaited_once_with("root-9", query="inception")

    async def test_blank_query(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        assert await use_case.search("   ") == []
        mock_source.list_entries.assert_not_awaited()

    async def test_missing_token(self, tokenless: TeleboxCatalogUseCase) -> None:
        with pytest.raises(MissingCredential):
            await tokenless.search("x")


# ---------------------------------------------------------------------------
# Detail
# ---------------------------------------------------------------------------


class TestLoadDetail:
    async def test_movie_detail(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        ref = f"{_BASE}/file/103"

        detail = await use_case.load_detail(ref)

        assert detail == MovieDetail(
            title="Inception.2010.mp4",
            url=ref,
            data_url=ref,
            size_caption="1.5 KB",
            plot=DETAIL_PLOT,
        )
        mock_source.get_file_info.assert_awaited_once_with("103")

    async def test_episode_detail(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock
    ) -> None:
        mock_source.get_file_info.return_value = FileInfo(
            name="Dark.s02e05.1080p.mkv", size_bytes=None
        )
        ref = f"{_BASE}/file/101"

        detail = await use_case.load_detail(ref)

        assert isinstance(detail, SeriesDetail)
        assert detail.title == "Dark.s02e05.1080p.mkv"
        assert detail.size_caption == ""
        assert len(detail.episodes) == 1
        episode = detail.episodes[0]
        assert episode.data_url == ref
        assert (episode.season, episode.episode) == (2, 5)

    @pytest.mark.parametrize(
        "error",
        [TransportFailure("down", status=500), MalformedResponse("garbage")],
    )
    async def test_degrades_to_placeholder(
        self, use_case: TeleboxCatalogUseCase, mock_source: AsyncMock, error
    ) -> None:
        mock_source.get_file_info.side_effect = error
        ref = f"{_BASE}/file/zzz"

        detail = await use_case.load_detail(ref)

        assert isinstance(detail, MovieDetail)
        assert detail.title == PLACEHOLDER_TITLE
        assert detail.url == ref
        assert detail.data_url == ref

    @pytest.mark.parametrize("reference", ["", f"{_BASE}/"])
    async def test_invalid_reference(
        self,
        use_case: TeleboxCatalogUseCase,
        mock_source: AsyncMock,
        reference: str,
    ) -> None:
        with pytest.raises(InvalidReference):
            await use_case.load_detail(reference)
        mock_source.get_file_info.assert_not_awaited()

    async def test_missing_token_checked_first(
        self, tokenless: TeleboxCatalogUseCase
    ) -> None:
        with pytest.raises(MissingCredential):
            await tokenless.load_detail("")


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------


class TestResolveLinks:
    async def test_single_link(
        self, use_case: TeleboxCatalogUseCase, mock_resolver: AsyncMock
    ) -> None:
        ref = f"{_BASE}/file/103"

        result = await use_case.resolve_links(ref)

        assert result.found is True
        assert len(result.links) == 1
        assert result.links[0].quality is LinkQuality.UNKNOWN
        assert result.subtitles == []
        mock_resolver.resolve.assert_awaited_once_with("103", ref)

    async def test_bare_id_uses_item_page(
        self, use_case: TeleboxCatalogUseCase, mock_resolver: AsyncMock
    ) -> None:
        await use_case.resolve_links("103")

        mock_resolver.resolve.assert_awaited_once_with("103", f"{_BASE}/file/103")

    async def test_no_link_found(
        self, use_case: TeleboxCatalogUseCase, mock_resolver: AsyncMock
    ) -> None:
        mock_resolver.resolve.side_effect = NoLinkFound("nothing")

        result = await use_case.resolve_links(f"{_BASE}/file/103")

        assert result.found is False
        assert result.links == []

    async def test_reference_without_segment(
        self, use_case: TeleboxCatalogUseCase, mock_resolver: AsyncMock
    ) -> None:
        result = await use_case.resolve_links(_BASE)

        assert result.found is False
        mock_resolver.resolve.assert_not_awaited()

    async def test_missing_token(
        self, tokenless: TeleboxCatalogUseCase, mock_resolver: AsyncMock
    ) -> None:
        with pytest.raises(MissingCredential):
            await tokenless.resolve_links(f"{_BASE}/file/103")
        mock_resolver.resolve.assert_not_awaited()
