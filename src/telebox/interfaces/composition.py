"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from telebox.application.use_cases.catalog import TeleboxCatalogUseCase
from telebox.domain.ports import FetchTransportPort
from telebox.infrastructure.config.schema import AppConfig, HttpConfig
from telebox.infrastructure.http import HttpxFetchTransport
from telebox.infrastructure.linkbox import LinkboxLinkResolver, LinkboxSourceResolver
from telebox.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_http_client(http: HttpConfig) -> httpx.AsyncClient:
    """Shared client; every request is attempted once (no retry transport)."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(http.timeout_seconds),
        headers={"User-Agent": http.user_agent},
        follow_redirects=http.follow_redirects,
    )


def build_catalog_use_case(
    config: AppConfig,
    transport: FetchTransportPort,
) -> TeleboxCatalogUseCase:
    """Wire both Linkbox resolvers and the catalog use case around *transport*."""
    linkbox = config.linkbox
    return TeleboxCatalogUseCase(
        source=LinkboxSourceResolver(transport, linkbox, base_url=linkbox.base_url),
        link_resolver=LinkboxLinkResolver(
            transport, linkbox, base_url=linkbox.base_url
        ),
        credentials=linkbox,
        base_url=linkbox.base_url,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the HTTP client, transport and use case; close the client on exit.

    A missing API token is only warned about here: the app still starts and
    every catalog call answers with a missing-credential error.
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = build_http_client(config.http)
    state.transport = HttpxFetchTransport(state.http_client)
    state.catalog_uc = build_catalog_use_case(config, state.transport)
    log.info(
        "catalog_ready",
        base_url=config.linkbox.base_url,
        base_folder_id=config.linkbox.base_folder_id,
        timeout=config.http.timeout_seconds,
    )
    if not config.linkbox.api_token:
        log.warning("linkbox_token_missing")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
