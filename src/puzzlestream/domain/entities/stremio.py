"""Domain entities for the Stremio addon surface.

Pure value objects; JSON shaping happens in the router.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StremioContentType = Literal["movie"]


@dataclass(frozen=True)
class StremioMetaPreview:
    """Stremio catalog item (MetaPreview object)."""

    id: str  # "puzzle:<slug>"
    name: str
    type: StremioContentType = "movie"


@dataclass(frozen=True)
class StremioMeta:
    """Stremio Meta object, extended with the resolved manifest URL."""

    id: str
    name: str
    type: StremioContentType = "movie"
    hls: str | None = None


@dataclass(frozen=True)
class StremioStream:
    """Stremio protocol Stream object."""

    url: str  # HLS manifest URL
    title: str = "Puzzle-Movies (HLS)"
    is_free: bool = True
