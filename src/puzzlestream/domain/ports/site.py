"""Ports for the authenticated movie site."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from puzzlestream.domain.entities.resolution import Candidate, SearchQuery


@runtime_checkable
class SearchClientPort(Protocol):
    async def search(self, query: SearchQuery) -> list[Candidate]:
        """Query the site's search page.

        Raises ``RemoteUnavailable`` on transport failure; returns an empty
        list when nothing matches.
        """
        ...


@runtime_checkable
class StreamExtractorPort(Protocol):
    async def extract_stream(self, slug: str) -> str | None:
        """Return the manifest URL of a film page, or None if absent.

        Raises ``RemoteUnavailable`` on transport failure.
        """
        ...


@runtime_checkable
class SlugProberPort(Protocol):
    async def probe(self, title: str, year: int) -> Candidate | None:
        """Guess the slug for title/year and extract its stream.

        Never raises; None when the guess does not resolve.
        """
        ...
