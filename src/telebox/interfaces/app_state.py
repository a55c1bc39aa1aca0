"""Typed view of ``app.state`` for the catalog service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from telebox.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from telebox.application.use_cases.catalog import TeleboxCatalogUseCase
    from telebox.domain.ports import FetchTransportPort


class AppState(State):
    """Resources shared by all requests.

    ``config`` is set by ``build_app``; everything else is created and torn
    down by ``composition.lifespan``.
    """

    config: AppConfig

    http_client: httpx.AsyncClient
    transport: FetchTransportPort

    catalog_uc: TeleboxCatalogUseCase
