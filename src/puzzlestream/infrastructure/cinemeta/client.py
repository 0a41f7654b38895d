"""Cinemeta metadata bridge: IMDb/TMDB id -> title + year.

Uses the public Stremio Cinemeta catalog (no API key)::

    https://v3-cinemeta.strem.io/meta/movie/tt0084787.json
    https://v3-cinemeta.strem.io/meta/movie/tmdb/1091.json
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import structlog

from puzzlestream.domain.entities.resolution import TitleMatchInfo

log = structlog.get_logger(__name__)

DEFAULT_CINEMETA_URL = "https://v3-cinemeta.strem.io"
_YEAR_RE = re.compile(r"\d{4}")


def cinemeta_path(ref_id: str) -> str:
    """Map a Stremio id to its Cinemeta path component.

    ``tt0084787`` stays as is, ``tmdb:1091`` becomes ``tmdb/1091``.
    """
    if ref_id.startswith("tt"):
        return ref_id
    return ref_id.replace("tmdb:", "tmdb/", 1)


def _parse_year(meta: dict[str, Any]) -> int | None:
    for key in ("year", "releaseInfo"):
        value = meta.get(key)
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            m = _YEAR_RE.search(value)
            if m:
                return int(m.group(0))
    return None


class CinemetaClient:
    """Implements ``MetadataBridgePort``; failures are logged and yield None."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_CINEMETA_URL,
        timeout: float = 8.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _fetch_meta(self, ref_id: str) -> dict[str, Any] | None:
        url = f"{self._base_url}/meta/movie/{cinemeta_path(ref_id)}.json"
        try:
            resp = await self._http.get(url, timeout=self._timeout)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError):
            log.warning("cinemeta_lookup_failed", ref_id=ref_id, exc_info=True)
            return None

        meta = data.get("meta") if isinstance(data, dict) else None
        return meta if isinstance(meta, dict) else None

    async def lookup(self, ref_id: str) -> TitleMatchInfo | None:
        meta = await self._fetch_meta(ref_id)
        if not meta:
            log.info("cinemeta_no_meta", ref_id=ref_id)
            return None

        name = meta.get("name")
        if not isinstance(name, str) or not name.strip():
            return None

        info = TitleMatchInfo(title=name.strip(), year=_parse_year(meta))
        log.debug("cinemeta_resolved", ref_id=ref_id, title=info.title, year=info.year)
        return info
