"""Resolution orchestrator: content reference -> HLS manifest URL.

The fallback chain is an ordered list of strategies.  Each strategy
decides whether it applies to the current request and makes one attempt;
the orchestrator walks the list until one attempt yields a stream URL.

Canonical order:

1. ``SlugShortcut``       internal ``puzzle:<slug>`` references
2. ``SearchThenExtract``  first search hit, no re-ranking
3. ``BruteProbe``         guessed slug, only with a known year
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

from puzzlestream.domain.entities.resolution import (
    Candidate,
    ContentRef,
    ResolvedStream,
    SearchQuery,
)
from puzzlestream.domain.exceptions import RemoteUnavailable
from puzzlestream.domain.ports.metadata import MetadataBridgePort
from puzzlestream.domain.ports.site import (
    SearchClientPort,
    SlugProberPort,
    StreamExtractorPort,
)

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """What a strategy gets to see: the reference and, if known, the query."""

    ref: ContentRef
    query: SearchQuery | None = None


class ResolutionStrategy(Protocol):
    name: str

    def applies(self, ctx: ResolutionContext) -> bool: ...

    async def attempt(self, ctx: ResolutionContext) -> Candidate | None: ...


class SlugShortcut:
    """Internal references already carry the slug: extract directly."""

    name = "slug_shortcut"

    def __init__(self, extractor: StreamExtractorPort) -> None:
        self._extractor = extractor

    def applies(self, ctx: ResolutionContext) -> bool:
        return ctx.ref.is_internal

    async def attempt(self, ctx: ResolutionContext) -> Candidate | None:
        slug = ctx.ref.slug or ""
        url = await self._extractor.extract_stream(slug)
        return Candidate(slug=slug, title=slug, stream_url=url)


class SearchThenExtract:
    """Search the site and extract the stream of the first hit."""

    name = "search_then_extract"

    def __init__(
        self, search_client: SearchClientPort, extractor: StreamExtractorPort
    ) -> None:
        self._search = search_client
        self._extractor = extractor

    def applies(self, ctx: ResolutionContext) -> bool:
        return ctx.query is not None and bool(ctx.query.title)

    async def attempt(self, ctx: ResolutionContext) -> Candidate | None:
        assert ctx.query is not None
        hits = await self._search.search(ctx.query)
        if not hits:
            return None
        first = hits[0]
        url = await self._extractor.extract_stream(first.slug)
        return Candidate(
            slug=first.slug, title=first.title, year=first.year, stream_url=url
        )


class BruteProbe:
    """Guess the slug from title + year; requires a known year."""

    name = "brute_probe"

    def __init__(self, prober: SlugProberPort) -> None:
        self._prober = prober

    def applies(self, ctx: ResolutionContext) -> bool:
        return ctx.query is not None and ctx.query.year is not None

    async def attempt(self, ctx: ResolutionContext) -> Candidate | None:
        assert ctx.query is not None and ctx.query.year is not None
        return await self._prober.probe(ctx.query.title, ctx.query.year)


def build_default_strategies(
    search_client: SearchClientPort,
    extractor: StreamExtractorPort,
    prober: SlugProberPort,
) -> list[ResolutionStrategy]:
    return [
        SlugShortcut(extractor),
        SearchThenExtract(search_client, extractor),
        BruteProbe(prober),
    ]


class ResolutionOrchestrator:
    """Runs the strategy chain for one reference.

    ``resolve`` never raises: remote failures inside a tier count as
    "no result" and the next applicable tier runs.
    """

    def __init__(
        self,
        strategies: Sequence[ResolutionStrategy],
        metadata_bridge: MetadataBridgePort,
    ) -> None:
        self._strategies = list(strategies)
        self._bridge = metadata_bridge

    async def build_context(self, ref: ContentRef) -> ResolutionContext | None:
        """Bridge external references to a query; None when unknown."""
        if ref.is_internal:
            return ResolutionContext(ref=ref)

        try:
            info = await self._bridge.lookup(ref.raw)
        except Exception:
            log.warning("metadata_bridge_failed", ref=ref.raw, exc_info=True)
            return None
        if info is None:
            return None

        return ResolutionContext(
            ref=ref, query=SearchQuery(title=info.title, year=info.year)
        )

    async def resolve(self, ref: ContentRef) -> ResolvedStream:
        ctx = await self.build_context(ref)
        if ctx is None:
            log.info("resolution_no_metadata", ref=ref.raw)
            return ResolvedStream()
        return await self.resolve_context(ctx)

    async def resolve_context(self, ctx: ResolutionContext) -> ResolvedStream:
        last: Candidate | None = None
        for strategy in self._strategies:
            if not strategy.applies(ctx):
                continue
            try:
                candidate = await strategy.attempt(ctx)
            except RemoteUnavailable as exc:
                log.warning(
                    "resolution_tier_unavailable",
                    strategy=strategy.name,
                    ref=ctx.ref.raw,
                    url=exc.url,
                    status=exc.status,
                )
                continue

            if candidate is None:
                log.debug("resolution_tier_empty", strategy=strategy.name)
                continue

            last = candidate
            if candidate.stream_url:
                log.info(
                    "resolution_found",
                    strategy=strategy.name,
                    ref=ctx.ref.raw,
                    slug=candidate.slug,
                )
                return ResolvedStream(slug=candidate.slug, url=candidate.stream_url)

        log.info("resolution_no_stream", ref=ctx.ref.raw)
        # Internal references keep their slug even when every tier failed.
        slug = last.slug if last else ctx.ref.slug
        return ResolvedStream(slug=slug)
