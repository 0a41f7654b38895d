"""Stremio addon API endpoints (configure page, manifest, catalog, meta, stream).

Every route below ``/{token}/`` needs a valid addon token carrying the
site cookie; a missing or broken token is the only hard error (400).
"""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from puzzlestream import __version__
from puzzlestream.domain.entities.resolution import Candidate, ContentRef
from puzzlestream.domain.entities.stremio import (
    StremioMeta,
    StremioMetaPreview,
    StremioStream,
)
from puzzlestream.domain.exceptions import ConfigurationError
from puzzlestream.interfaces.api.stremio.token import (
    AddonSettings,
    require_settings,
)
from puzzlestream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

ADDON_ID = "org.ruslan.puzzlemovies"
CATALOG_ID = "puzzle-search"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}

MANIFEST: dict[str, Any] = {
    "id": ADDON_ID,
    "version": __version__,
    "name": "Puzzle-Movies",
    "description": "Streams from puzzle-movies.com (cookie auth)",
    "logo": "https://puzzle-movies.com/favicons/movies/apple-touch-icon.png",
    "types": ["movie"],
    "resources": ["catalog", "meta", "stream"],
    "idPrefixes": ["tt", "tmdb", "puzzle:"],
    "catalogs": [
        {
            "type": "movie",
            "id": CATALOG_ID,
            "name": "Puzzle Search",
            "extra": [{"name": "search", "isRequired": True}],
        }
    ],
}

CONFIGURE_PAGE = """<!DOCTYPE html><meta charset=utf-8>
<title>Puzzle-Movies &rarr; Stremio</title>
<style>body{font-family:sans-serif;max-width:460px;margin:2rem auto}</style>
<h2>Puzzle-Movies &rarr; Stremio</h2>
<p>Paste your <code>Cookie</code> header from puzzle-movies.com</p>
<form id=f><textarea name=cookies rows=4 style="width:100%" required></textarea>
<br><br><button>Generate link</button></form>
<p id=o style="word-break:break-all;margin-top:1.5rem"></p>
<script>
f.onsubmit=e=>{
 e.preventDefault();
 const tok=btoa(unescape(encodeURIComponent(JSON.stringify({cookies:f.cookies.value.trim()}))))
   .replace(/\\+/g,'-').replace(/\\//g,'_').replace(/=+$/,'');
 o.textContent=location.origin+'/'+tok+'/manifest.json';
};
</script>"""


def _json(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _missing_cookies() -> JSONResponse:
    return _json({"err": "missing cookies"}, status_code=400)


def _settings(token: str) -> AddonSettings | None:
    try:
        return require_settings(token)
    except ConfigurationError as exc:
        log.info("stremio_invalid_token", reason=str(exc))
        return None


def _strip_json(raw_id: str) -> str:
    return raw_id[:-5] if raw_id.lower().endswith(".json") else raw_id


def _preview(candidate: Candidate) -> StremioMetaPreview:
    return StremioMetaPreview(
        id=ContentRef.internal(candidate.slug).raw, name=candidate.display_name
    )


def _format_preview(preview: StremioMetaPreview) -> dict[str, str]:
    return {"id": preview.id, "type": preview.type, "name": preview.name}


def _format_meta(meta: StremioMeta) -> dict[str, Any]:
    return {"id": meta.id, "type": meta.type, "name": meta.name, "hls": meta.hls}


def _format_stream(stream: StremioStream) -> dict[str, Any]:
    return {"url": stream.url, "title": stream.title, "isFree": stream.is_free}


def _search_term(query: str | None, request: Request) -> str:
    """Search term from the path (already decoded) or the ``?search=`` query."""
    if query is not None:
        return query.strip()
    return (request.query_params.get("search") or "").strip()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.options("/{path:path}")
async def stremio_preflight(path: str) -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@router.get("/")
async def configure_page() -> HTMLResponse:
    """Serve the cookie configuration form."""
    return HTMLResponse(content=CONFIGURE_PAGE, headers=CORS_HEADERS)


@router.get("/manifest.json")
async def stremio_manifest_without_token() -> JSONResponse:
    return _missing_cookies()


@router.get("/{token}/manifest.json")
async def stremio_manifest(token: str) -> JSONResponse:
    if _settings(token) is None:
        return _missing_cookies()
    return _json(MANIFEST)


async def _catalog(
    request: Request,
    token: str,
    content_type: str,
    catalog_id: str,
    query: str | None,
) -> JSONResponse:
    settings = _settings(token)
    if settings is None:
        return _missing_cookies()

    term = _search_term(query, request)
    if not term or content_type != "movie" or catalog_id != CATALOG_ID:
        return _json({"metas": []})

    state = cast(AppState, request.app.state)
    assert state.pipeline_factory is not None
    try:
        async with state.pipeline_factory(
            state.config, state.metadata_bridge, settings.cookies
        ) as pipeline:
            candidates = await pipeline.catalog.search(term)
    except Exception:
        log.warning("stremio_catalog_failed", term=term, exc_info=True)
        return _json({"metas": []})

    return _json({"metas": [_format_preview(_preview(c)) for c in candidates]})


@router.get("/{token}/catalog/{content_type}/{catalog_id}.json")
async def stremio_catalog(
    request: Request, token: str, content_type: str, catalog_id: str
) -> JSONResponse:
    """Catalog search with the term in the query string (``?search=``)."""
    return await _catalog(request, token, content_type, catalog_id, None)


@router.get("/{token}/catalog/{content_type}/{catalog_id}/search={query}.json")
async def stremio_catalog_search(
    request: Request, token: str, content_type: str, catalog_id: str, query: str
) -> JSONResponse:
    """Catalog search with the term as a Stremio path extra (``search=...``)."""
    return await _catalog(request, token, content_type, catalog_id, query)


@router.get("/{token}/meta/{content_type}/{content_id}.json")
async def stremio_meta(
    request: Request, token: str, content_type: str, content_id: str
) -> JSONResponse:
    settings = _settings(token)
    if settings is None:
        return _missing_cookies()

    raw_id = _strip_json(content_id)
    state = cast(AppState, request.app.state)
    assert state.pipeline_factory is not None
    try:
        async with state.pipeline_factory(
            state.config, state.metadata_bridge, settings.cookies
        ) as pipeline:
            meta = await pipeline.addon.meta(raw_id)
    except Exception:
        log.warning("stremio_meta_failed", content_id=raw_id, exc_info=True)
        meta = None

    return _json({"meta": _format_meta(meta) if meta else {}})


@router.get("/{token}/stream/{content_type}/{content_id}.json")
async def stremio_stream(
    request: Request, token: str, content_type: str, content_id: str
) -> JSONResponse:
    settings = _settings(token)
    if settings is None:
        return _missing_cookies()

    raw_id = _strip_json(content_id)
    log.info("stremio_stream_request", content_id=raw_id, content_type=content_type)

    state = cast(AppState, request.app.state)
    assert state.pipeline_factory is not None
    try:
        async with state.pipeline_factory(
            state.config, state.metadata_bridge, settings.cookies
        ) as pipeline:
            streams = await pipeline.addon.streams(raw_id)
    except Exception:
        log.warning("stremio_stream_failed", content_id=raw_id, exc_info=True)
        streams = []

    log.info("stremio_stream_response", content_id=raw_id, streams=len(streams))
    return _json({"streams": [_format_stream(s) for s in streams]})
