"""Composition root: app-wide resources via FastAPI lifespan, plus the
per-request resolution pipeline bound to the caller's cookie."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from puzzlestream.application.resolution import (
    ResolutionOrchestrator,
    build_default_strategies,
)
from puzzlestream.application.use_cases import AddonUseCase, CatalogSearchUseCase
from puzzlestream.domain.ports.metadata import MetadataBridgePort
from puzzlestream.infrastructure.cinemeta import CinemetaClient
from puzzlestream.infrastructure.config import AppConfig
from puzzlestream.infrastructure.puzzle import (
    PuzzleSession,
    RemoteSearchClient,
    SlugProber,
    StreamExtractor,
)
from puzzlestream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AddonPipeline:
    """Use cases sharing one authenticated session."""

    catalog: CatalogSearchUseCase
    addon: AddonUseCase


@asynccontextmanager
async def open_pipeline(
    config: AppConfig,
    metadata_bridge: MetadataBridgePort,
    cookies: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[AddonPipeline]:
    """Open a site session for *cookies* and wire the pipeline on top of it.

    The session is closed when the block exits; nothing outlives the request.
    """
    async with PuzzleSession(cookies, config.site_session, transport=transport) as session:
        search_client = RemoteSearchClient(session)
        extractor = StreamExtractor(session)
        prober = SlugProber(extractor)
        orchestrator = ResolutionOrchestrator(
            build_default_strategies(search_client, extractor, prober),
            metadata_bridge,
        )
        yield AddonPipeline(
            catalog=CatalogSearchUseCase(search_client, prober),
            addon=AddonUseCase(orchestrator),
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create and dispose the shared Cinemeta client.

    Site clients are not created here: each request gets its own.
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = httpx.AsyncClient(
        timeout=config.cinemeta_timeout_seconds,
        follow_redirects=True,
    )
    state.metadata_bridge = CinemetaClient(
        http_client=state.http_client,
        base_url=config.cinemeta_base_url,
        timeout=config.cinemeta_timeout_seconds,
    )
    if getattr(state, "pipeline_factory", None) is None:
        state.pipeline_factory = open_pipeline
    log.info("app_resources_ready", site=config.site_base_url)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("app_resources_closed")
