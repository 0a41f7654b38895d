"""Meta and stream use cases on top of the resolution orchestrator."""

from __future__ import annotations

import structlog

from puzzlestream.application.resolution import ResolutionOrchestrator
from puzzlestream.domain.entities.resolution import ContentRef
from puzzlestream.domain.entities.stremio import StremioMeta, StremioStream

log = structlog.get_logger(__name__)

STREAM_TITLE = "Puzzle-Movies (HLS)"


class AddonUseCase:
    def __init__(self, orchestrator: ResolutionOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def meta(self, raw_id: str) -> StremioMeta | None:
        """Build the meta object for *raw_id*.

        Internal references are named after their slug, external ones
        after the bridge title.  None when the bridge knows nothing.
        """
        ref = ContentRef.parse(raw_id)
        ctx = await self._orchestrator.build_context(ref)
        if ctx is None:
            return None

        resolved = await self._orchestrator.resolve_context(ctx)
        if ctx.query is not None:
            name = ctx.query.title
        else:
            name = ref.slug or ref.raw
        return StremioMeta(id=ref.raw, name=name, hls=resolved.url)

    async def streams(self, raw_id: str) -> list[StremioStream]:
        ref = ContentRef.parse(raw_id)
        resolved = await self._orchestrator.resolve(ref)
        if not resolved.found:
            return []
        assert resolved.url is not None
        return [StremioStream(url=resolved.url, title=STREAM_TITLE)]
