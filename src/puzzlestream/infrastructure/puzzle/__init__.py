"""puzzle-movies.com adapters: session, search, extraction, slug probing."""

from .search_client import RemoteSearchClient
from .session import PuzzleSession, SiteSessionConfig
from .slug_prober import SlugProber, guess_slug
from .stream_extractor import StreamExtractor, extract_manifest_url

__all__ = [
    "PuzzleSession",
    "RemoteSearchClient",
    "SiteSessionConfig",
    "SlugProber",
    "StreamExtractor",
    "extract_manifest_url",
    "guess_slug",
]
