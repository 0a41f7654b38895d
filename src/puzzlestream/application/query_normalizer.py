"""Free-text query normalization: ``"The Thing 1982"`` -> title + year.

Two year rules, tried in order:

1. a ``19xx``/``20xx`` four-digit token that is the last digit run;
2. a trailing two-digit token ``n`` -> ``2000+n`` if ``n < 30``
   else ``1900+n`` (apostrophe-year pivot, ``'99`` -> 1999).

The year is stripped from the title only when it sits at the tail.
"""

from __future__ import annotations

import re

import structlog

from puzzlestream.domain.entities.resolution import SearchQuery

log = structlog.get_logger(__name__)

_YEAR4_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!.*\d)", re.DOTALL)
_YEAR2_RE = re.compile(r"\b(\d{2})(?!.*\d)", re.DOTALL)

# Characters allowed between the year token and the end of the string
# for the token to count as "at the tail".
_TAIL_CHARS = " \t\r\n)]}'\".-"
# Separators trimmed from the title once the year is cut off.
_TITLE_TRAIL_CHARS = " \t\r\n([{'’\"-,:"

_SLUG_LITERAL_RE = re.compile(r"^[a-z0-9-]+-\d{4}$")

TWO_DIGIT_PIVOT = 30


def _expand_two_digit(n: int) -> int:
    return 2000 + n if n < TWO_DIGIT_PIVOT else 1900 + n


def _find_year(raw: str) -> tuple[int, re.Match[str]] | None:
    m = _YEAR4_RE.search(raw)
    if m:
        return int(m.group(1)), m
    m = _YEAR2_RE.search(raw)
    if m:
        return _expand_two_digit(int(m.group(1))), m
    return None


def normalize(raw: str) -> SearchQuery:
    """Turn a raw search string into a ``SearchQuery``.

    Never raises: unusable input degrades to ``(raw.strip(), None)``.
    """
    if not isinstance(raw, str):
        return SearchQuery(title="", year=None)

    text = raw.strip()
    if not text:
        return SearchQuery(title="", year=None)

    found = _find_year(text)
    if found is None:
        return SearchQuery(title=text, year=None)

    year, match = found
    if text[match.end() :].strip(_TAIL_CHARS):
        # Year is not at the tail; keep it inside the title.
        return SearchQuery(title=text, year=year)

    title = text[: match.start()].rstrip(_TITLE_TRAIL_CHARS)
    if not title:
        log.debug("query_year_only", raw=text)
        return SearchQuery(title=text, year=None)

    return SearchQuery(title=title, year=year)


def is_slug_literal(term: str) -> bool:
    """True when *term* already looks like a site slug (``some-movie-2020``)."""
    return bool(_SLUG_LITERAL_RE.match(term))


def slug_to_title(slug: str) -> str:
    return slug.replace("-", " ")
