"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from puzzlestream import __version__
from puzzlestream.infrastructure.config import AppConfig
from puzzlestream.interfaces.app_state import AppState
from puzzlestream.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create the FastAPI app: configuration only, no resource initialization.

    Resources (Cinemeta HTTP client) are created in lifespan().
    """
    app = FastAPI(
        title="puzzlestream",
        description="Stremio addon for puzzle-movies.com HLS streams",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config
    app.state.pipeline_factory = None

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "ok"}

    from puzzlestream.interfaces.api.stremio import router as stremio_router

    app.include_router(stremio_router)

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            # Path segment 1 is the addon token (contains the cookie): never log it.
            segments = request.url.path.split("/")
            if len(segments) > 2 and segments[1] not in ("", "healthz", "manifest.json"):
                segments[1] = "<token>"

            log.info(
                "http_request",
                method=request.method,
                path="/".join(segments),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
