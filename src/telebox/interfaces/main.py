"""FastAPI application factory."""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response

from telebox import __version__
from telebox.infrastructure.config import AppConfig
from telebox.interfaces.api.catalog import router as catalog_router
from telebox.interfaces.app_state import AppState
from telebox.interfaces.composition import lifespan

log = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def build_app(config: AppConfig) -> FastAPI:
    """Build the app around *config*; resources are created in ``lifespan``."""
    app = FastAPI(
        title="Telebox Catalog",
        description="Browse Telebox/Linkbox cloud storage and resolve stream links",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.include_router(catalog_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        # Every log line emitted while serving carries the request id
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
                client_host=(request.client.host if request.client else None),
            )
            structlog.contextvars.unbind_contextvars("request_id")

    return app
