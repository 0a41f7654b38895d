"""puzzle-movies.com search page client.

Issues ``GET /search-result?search_term=<title> <year>`` and maps each
result card to a ``Candidate`` through an explicit selector table, so
markup drift stays contained in ``_FIELDS``.

Result card structure::

    <div class="puzzle-movies__content-items">
      <div class="puzzle-movies__selected-item">
        <a href="/films/the-thing-1982">...</a>
        <div class="puzzle-movies__selected-title">The Thing</div>
        <div class="puzzle-movies__selected-popup-content-bot-year">1982</div>
      </div>
    </div>
"""

from __future__ import annotations

import re
from urllib.parse import unquote, urlsplit

import structlog

from puzzlestream.domain.entities.resolution import Candidate, SearchQuery
from puzzlestream.infrastructure.common.html_selectors import (
    FieldSelector,
    extract_fields,
    parse_html,
    select_items,
)
from puzzlestream.infrastructure.puzzle.session import PuzzleSession

log = structlog.get_logger(__name__)

SEARCH_PATH = "/search-result"

_ITEM_SELECTOR = ".puzzle-movies__content-items .puzzle-movies__selected-item"

_FIELDS: dict[str, FieldSelector] = {
    "href": FieldSelector("a[href]", attr="href"),
    "title": FieldSelector(".puzzle-movies__selected-title"),
    "year": FieldSelector(".puzzle-movies__selected-popup-content-bot-year"),
}

# The site encodes the release year as the slug suffix.
_SLUG_YEAR_RE = re.compile(r"-(\d{4})$")
# Slugs must be usable as a URL path segment without escaping;
# dot segments ("." and "..") are never slugs.
_SAFE_SLUG_RE = re.compile(r"^(?=.*[A-Za-z0-9])[A-Za-z0-9._~-]+$")
_DIGITS_RE = re.compile(r"\d{4}")


def build_search_term(query: SearchQuery) -> str:
    if query.year:
        return f"{query.title} {query.year}".strip()
    return query.title.strip()


def slug_from_href(href: str) -> str | None:
    """Return the last path segment of *href*, or None if unusable."""
    if not href:
        return None
    path = urlsplit(href).path
    slug = unquote(path.rstrip("/").rsplit("/", 1)[-1]) if path else ""
    if not slug or not _SAFE_SLUG_RE.match(slug):
        return None
    return slug


def _parse_year(slug: str, rendered: str) -> int:
    m = _SLUG_YEAR_RE.search(slug)
    if m:
        return int(m.group(1))
    m = _DIGITS_RE.search(rendered)
    return int(m.group(0)) if m else 0


def parse_search_results(html: str, year: int | None = None) -> list[Candidate]:
    """Parse a search result page into candidates.

    Items without a usable slug are skipped.  When *year* is given,
    items with any other year are dropped.
    """
    soup = parse_html(html)
    candidates: list[Candidate] = []
    for item in select_items(soup, _ITEM_SELECTOR):
        fields = extract_fields(item, _FIELDS)
        slug = slug_from_href(fields["href"])
        if slug is None:
            continue

        movie_year = _parse_year(slug, fields["year"])
        if year and movie_year != year:
            continue

        candidates.append(Candidate(slug=slug, title=fields["title"], year=movie_year))
    return candidates


class RemoteSearchClient:
    """Searches the site; one HTTP round trip per call."""

    def __init__(self, session: PuzzleSession) -> None:
        self._session = session

    async def search(self, query: SearchQuery) -> list[Candidate]:
        term = build_search_term(query)
        html = await self._session.get_text(SEARCH_PATH, params={"search_term": term})
        candidates = parse_search_results(html, query.year)
        log.debug(
            "site_search_done",
            term=term,
            year=query.year,
            results=len(candidates),
        )
        return candidates
