"""Value objects of the title/year resolution pipeline.

Pure value objects, no framework dependencies, no I/O.  Every instance
lives for a single resolution call.
"""

from __future__ import annotations

from dataclasses import dataclass

INTERNAL_PREFIX = "puzzle:"


@dataclass(frozen=True)
class SearchQuery:
    """Normalized free-text query: a title and an optional release year."""

    title: str
    year: int | None = None


@dataclass(frozen=True)
class Candidate:
    """One remote search hit or one probed slug guess.

    ``year`` is 0 when unknown.  ``stream_url`` is only populated when the
    candidate came out of the slug prober, which extracts while probing.
    """

    slug: str
    title: str
    year: int = 0
    stream_url: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.title} ({self.year})" if self.year else self.title


@dataclass(frozen=True)
class ResolvedStream:
    """Outcome of a resolution: the slug reached and its manifest URL.

    An absent ``url`` means extraction failed, not that the slug is invalid.
    """

    slug: str | None = None
    url: str | None = None

    @property
    def found(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class ContentRef:
    """Caller-facing identifier.

    ``puzzle:<slug>`` is an internal reference; every other id (``tt…``,
    ``tmdb:…``) is external and needs the metadata bridge.
    """

    raw: str
    slug: str | None = None

    @classmethod
    def parse(cls, raw: str) -> ContentRef:
        raw = raw.strip()
        if raw.startswith(INTERNAL_PREFIX):
            return cls(raw=raw, slug=raw[len(INTERNAL_PREFIX) :])
        return cls(raw=raw)

    @classmethod
    def internal(cls, slug: str) -> ContentRef:
        return cls(raw=f"{INTERNAL_PREFIX}{slug}", slug=slug)

    @property
    def is_internal(self) -> bool:
        return self.slug is not None


@dataclass(frozen=True)
class TitleMatchInfo:
    """Reference title and year returned by the metadata bridge."""

    title: str
    year: int | None = None
