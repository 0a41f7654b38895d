"""Port for the external metadata bridge (canonical id -> title/year)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from puzzlestream.domain.entities.resolution import TitleMatchInfo


@runtime_checkable
class MetadataBridgePort(Protocol):
    """Async interface for canonical id lookups."""

    async def lookup(self, ref_id: str) -> TitleMatchInfo | None:
        """Return title and year for an IMDb/TMDB id.

        Implementations swallow their own failures and return None.
        """
        ...
