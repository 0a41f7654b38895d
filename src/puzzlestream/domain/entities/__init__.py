from .resolution import (
    INTERNAL_PREFIX,
    Candidate,
    ContentRef,
    ResolvedStream,
    SearchQuery,
    TitleMatchInfo,
)
from .stremio import StremioMeta, StremioMetaPreview, StremioStream

__all__ = [
    "INTERNAL_PREFIX",
    "Candidate",
    "ContentRef",
    "ResolvedStream",
    "SearchQuery",
    "StremioMeta",
    "StremioMetaPreview",
    "StremioStream",
    "TitleMatchInfo",
]
