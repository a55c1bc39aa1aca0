"""Catalog API endpoints (manifest, browse, search, detail, links)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from telebox import __version__
from telebox.domain.entities.catalog import (
    CatalogItem,
    MovieDetail,
    ResolvedLink,
    SeriesDetail,
)
from telebox.domain.exceptions import InvalidReference, MissingCredential
from telebox.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="", tags=["catalog"])

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def _build_manifest(main_url: str) -> dict[str, Any]:
    """Build the provider manifest (host registration metadata)."""
    return {
        "id": "community.telebox",
        "version": __version__,
        "name": "Telebox",
        "description": "Access your Telebox/Linkbox cloud storage files",
        "mainUrl": main_url,
        "lang": "ar",
        "types": ["movie", "series"],
        "hasMainPage": True,
        "hasQuickSearch": False,
        "resources": ["browse", "search", "detail", "links"],
        "iconUrl": f"{main_url}/favicon.ico",
    }


def _json(content: Any, *, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=content,
        status_code=status_code,
        headers=_CORS_HEADERS,
    )


def _missing_credential(exc: MissingCredential) -> JSONResponse:
    return _json(
        {"error": "missing_credential", "message": str(exc)},
        status_code=401,
    )


def _format_item(item: CatalogItem) -> dict[str, Any]:
    return {
        "title": item.title,
        "url": item.url,
        "type": item.type.value,
        "season": item.season,
        "episode": item.episode,
        "size": item.size_bytes,
    }


def _format_detail(detail: MovieDetail | SeriesDetail) -> dict[str, Any]:
    if isinstance(detail, SeriesDetail):
        return {
            "type": "series",
            "title": detail.title,
            "url": detail.url,
            "plot": detail.plot,
            "size": detail.size_caption,
            "episodes": [
                {
                    "name": ep.name,
                    "data": ep.data_url,
                    "season": ep.season,
                    "episode": ep.episode,
                }
                for ep in detail.episodes
            ],
        }
    return {
        "type": "movie",
        "title": detail.title,
        "url": detail.url,
        "plot": detail.plot,
        "size": detail.size_caption,
        "data": detail.data_url,
    }


def _format_link(link: ResolvedLink) -> dict[str, Any]:
    return {
        "name": "Telebox",
        "url": link.url,
        "quality": int(link.quality),
        "isM3u8": link.is_segmented,
    }


@router.get("/manifest.json")
async def catalog_manifest(request: Request) -> JSONResponse:
    """Serve the provider manifest."""
    state = cast(AppState, request.app.state)
    return _json(_build_manifest(state.config.linkbox.base_url))


@router.get("/catalog/browse")
async def catalog_browse(
    request: Request,
    page: int = Query(default=1, ge=1),
) -> JSONResponse:
    """List the configured base folder as one labeled group."""
    state = cast(AppState, request.app.state)
    try:
        home = await state.catalog_uc.browse_root(page=page)
    except MissingCredential as exc:
        return _missing_credential(exc)

    return _json(
        {
            "groups": [
                {"name": g.name, "items": [_format_item(i) for i in g.items]}
                for g in home.groups
            ],
            "hasMore": home.has_more,
        }
    )


@router.get("/catalog/search")
async def catalog_search(
    request: Request,
    query: str = Query(default=""),
) -> JSONResponse:
    """Search the base folder (flat result list)."""
    state = cast(AppState, request.app.state)
    try:
        items = await state.catalog_uc.search(query)
    except MissingCredential as exc:
        return _missing_credential(exc)

    return _json({"items": [_format_item(i) for i in items]})


@router.get("/catalog/detail")
async def catalog_detail(
    request: Request,
    reference: str = Query(default=""),
) -> JSONResponse:
    """Load one item as a movie or a single-episode series."""
    state = cast(AppState, request.app.state)
    try:
        detail = await state.catalog_uc.load_detail(reference)
    except MissingCredential as exc:
        return _missing_credential(exc)
    except InvalidReference as exc:
        log.info("catalog_detail_invalid_reference", reference=reference)
        return _json(
            {"error": "invalid_reference", "message": str(exc)},
            status_code=404,
        )

    return _json(_format_detail(detail))


@router.get("/catalog/links")
async def catalog_links(
    request: Request,
    reference: str = Query(default=""),
) -> JSONResponse:
    """Resolve zero or one playable link; never subtitles."""
    state = cast(AppState, request.app.state)
    try:
        resolution = await state.catalog_uc.resolve_links(reference)
    except MissingCredential as exc:
        return _missing_credential(exc)

    return _json(
        {
            "found": resolution.found,
            "links": [_format_link(link) for link in resolution.links],
            "subtitles": list(resolution.subtitles),
        }
    )
