"""Catalog use case: free-text term -> site candidates."""

from __future__ import annotations

import structlog

from puzzlestream.application.query_normalizer import (
    is_slug_literal,
    normalize,
    slug_to_title,
)
from puzzlestream.domain.entities.resolution import Candidate
from puzzlestream.domain.exceptions import RemoteUnavailable
from puzzlestream.domain.ports.site import SearchClientPort, SlugProberPort

log = structlog.get_logger(__name__)


class CatalogSearchUseCase:
    """Search the site for a user term, probing a slug when search is empty.

    A term that already looks like a slug (``some-movie-2020``) is
    returned as the only candidate without touching the site.
    """

    def __init__(self, search_client: SearchClientPort, prober: SlugProberPort) -> None:
        self._search = search_client
        self._prober = prober

    async def search(self, term: str) -> list[Candidate]:
        term = term.strip()
        if not term:
            return []

        if is_slug_literal(term):
            log.debug("catalog_slug_shortcut", slug=term)
            return [Candidate(slug=term, title=slug_to_title(term))]

        query = normalize(term)
        try:
            hits = await self._search.search(query)
        except RemoteUnavailable:
            log.warning("catalog_search_unavailable", term=term, exc_info=True)
            hits = []

        if not hits and query.year is not None:
            probed = await self._prober.probe(query.title, query.year)
            if probed is not None:
                hits = [probed]

        log.info(
            "catalog_search_done",
            term=term,
            title=query.title,
            year=query.year,
            results=len(hits),
        )
        return hits
