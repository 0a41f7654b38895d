"""Deterministic slug guessing for titles the search index misses.

The site builds slugs as ``<title-kebab-case>-<year>``, so a direct guess
recovers films that search does not return.  Best effort: the site may
normalize some titles differently (articles, diacritics).
"""

from __future__ import annotations

import re

import structlog

from puzzlestream.domain.entities.resolution import Candidate
from puzzlestream.domain.exceptions import RemoteUnavailable
from puzzlestream.domain.ports.site import StreamExtractorPort

log = structlog.get_logger(__name__)

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    return _NON_ALNUM_RE.sub("-", title.lower()).strip("-")


def guess_slug(title: str, year: int) -> str:
    """``("Obscure Film", 1975)`` -> ``"obscure-film-1975"``."""
    base = slugify(title)
    return f"{base}-{year}" if base else str(year)


class SlugProber:
    def __init__(self, extractor: StreamExtractorPort) -> None:
        self._extractor = extractor

    async def probe(self, title: str, year: int) -> Candidate | None:
        slug = guess_slug(title, year)
        try:
            url = await self._extractor.extract_stream(slug)
        except RemoteUnavailable as exc:
            log.debug("slug_probe_unavailable", slug=slug, status=exc.status)
            return None

        if url is None:
            log.debug("slug_probe_miss", slug=slug)
            return None

        log.info("slug_probe_hit", slug=slug)
        return Candidate(slug=slug, title=title, year=year, stream_url=url)
