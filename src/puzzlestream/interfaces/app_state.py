"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

import httpx
from starlette.datastructures import State

from puzzlestream.domain.ports.metadata import MetadataBridgePort
from puzzlestream.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from puzzlestream.interfaces.composition import AddonPipeline


class PipelineFactory(Protocol):
    def __call__(
        self,
        config: AppConfig,
        metadata_bridge: MetadataBridgePort,
        cookies: str,
    ) -> AbstractAsyncContextManager[AddonPipeline]: ...


class AppState(State):
    """FastAPI application state.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Shared client for the metadata bridge (site clients are per request)
    http_client: httpx.AsyncClient
    metadata_bridge: MetadataBridgePort

    # Builds the per-request pipeline (overridable in tests)
    pipeline_factory: PipelineFactory | None
