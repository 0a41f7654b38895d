"""Film page -> HLS manifest URL.

The film page embeds the player config as a JavaScript object literal::

    hlsUrl: "https://cdn.example/hls/the-thing-1982/master.m3u8",

Only that single assignment is read; no script parsing happens.
"""

from __future__ import annotations

import re

import structlog

from puzzlestream.infrastructure.puzzle.session import PuzzleSession

log = structlog.get_logger(__name__)

FILM_PATH = "/films/{slug}"
MANIFEST_EXTENSION = ".m3u8"

_HLS_URL_RE = re.compile(r"""hlsUrl\s*[:=]\s*["']([^"']+\.m3u8)["']""")


def extract_manifest_url(html: str) -> str | None:
    """Return the quoted ``hlsUrl`` value, or None when the page has none."""
    m = _HLS_URL_RE.search(html)
    return m.group(1) if m else None


class StreamExtractor:
    def __init__(self, session: PuzzleSession) -> None:
        self._session = session

    async def extract_stream(self, slug: str) -> str | None:
        """Fetch the film page for *slug* and extract its manifest URL.

        Raises ``RemoteUnavailable`` when the page cannot be fetched.
        """
        html = await self._session.get_text(FILM_PATH.format(slug=slug))
        url = extract_manifest_url(html)
        if url is None:
            log.info("stream_not_found", slug=slug)
        return url
