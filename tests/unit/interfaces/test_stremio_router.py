"""Tests for Stremio addon router endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from puzzlestream.domain.entities.resolution import Candidate
from puzzlestream.domain.entities.stremio import StremioMeta, StremioStream
from puzzlestream.infrastructure.config import AppConfig
from puzzlestream.interfaces.api.stremio.router import router
from puzzlestream.interfaces.api.stremio.token import encode_token
from puzzlestream.interfaces.app_state import AppState

_HLS = "https://cdn.example/hls/master.m3u8"
_TOKEN = encode_token("sid=abc123")


def _make_app(
    *,
    catalog: AsyncMock | None = None,
    addon: AsyncMock | None = None,
    seen_cookies: list[str] | None = None,
) -> FastAPI:
    """Create a minimal FastAPI app with the stremio router."""
    app = FastAPI()
    app.include_router(router)

    pipeline = MagicMock()
    pipeline.catalog = catalog or AsyncMock()
    pipeline.addon = addon or AsyncMock()

    @asynccontextmanager
    async def _factory(config: Any, bridge: Any, cookies: str) -> AsyncIterator[Any]:
        if seen_cookies is not None:
            seen_cookies.append(cookies)
        yield pipeline

    app.state = AppState()
    app.state.config = AppConfig()
    app.state.metadata_bridge = AsyncMock()
    app.state.pipeline_factory = _factory
    return app


def _catalog_uc(candidates: list[Candidate]) -> AsyncMock:
    uc = AsyncMock()
    uc.search = AsyncMock(return_value=candidates)
    return uc


class TestCors:
    def test_preflight(self) -> None:
        client = TestClient(_make_app())

        resp = client.options(f"/{_TOKEN}/stream/movie/tt1.json")

        assert resp.status_code == 204
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "GET" in resp.headers["access-control-allow-methods"]

    def test_json_responses_carry_cors(self) -> None:
        resp = TestClient(_make_app()).get(f"/{_TOKEN}/manifest.json")
        assert resp.headers["access-control-allow-origin"] == "*"


class TestConfigurePage:
    def test_serves_form(self) -> None:
        resp = TestClient(_make_app()).get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "manifest.json" in resp.text


class TestManifestEndpoint:
    def test_missing_token(self) -> None:
        resp = TestClient(_make_app()).get("/manifest.json")
        assert resp.status_code == 400
        assert resp.json() == {"err": "missing cookies"}

    def test_invalid_token(self) -> None:
        resp = TestClient(_make_app()).get("/garbage/manifest.json")
        assert resp.status_code == 400
        assert resp.json() == {"err": "missing cookies"}

    def test_returns_valid_manifest(self) -> None:
        resp = TestClient(_make_app()).get(f"/{_TOKEN}/manifest.json")

        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == "org.ruslan.puzzlemovies"
        assert data["types"] == ["movie"]
        assert set(data["resources"]) == {"catalog", "meta", "stream"}
        assert data["idPrefixes"] == ["tt", "tmdb", "puzzle:"]
        assert data["catalogs"][0]["id"] == "puzzle-search"
        assert data["catalogs"][0]["extra"] == [{"name": "search", "isRequired": True}]


class TestCatalogEndpoint:
    def test_path_extra_search(self) -> None:
        seen: list[str] = []
        catalog = _catalog_uc(
            [
                Candidate(slug="the-thing-1982", title="The Thing", year=1982),
                Candidate(slug="thing-x", title="Thing X"),
            ]
        )
        client = TestClient(_make_app(catalog=catalog, seen_cookies=seen))

        resp = client.get(
            f"/{_TOKEN}/catalog/movie/puzzle-search/search=The%20Thing%201982.json"
        )

        assert resp.status_code == 200
        assert resp.json() == {
            "metas": [
                {"id": "puzzle:the-thing-1982", "type": "movie", "name": "The Thing (1982)"},
                {"id": "puzzle:thing-x", "type": "movie", "name": "Thing X"},
            ]
        }
        catalog.search.assert_awaited_once_with("The Thing 1982")
        assert seen == ["sid=abc123"]

    @pytest.mark.parametrize(
        ("encoded", "term"),
        [
            ("Fast%20%26%20Furious%202009", "Fast & Furious 2009"),
            ("Romeo%20%2B%20Juliet%201996", "Romeo + Juliet 1996"),
            ("100%25%20Wolf", "100% Wolf"),
            ("What%3F%3D%20Now", "What?= Now"),
        ],
    )
    def test_path_extra_decoded_once(self, encoded: str, term: str) -> None:
        catalog = _catalog_uc([])
        client = TestClient(_make_app(catalog=catalog))

        resp = client.get(
            f"/{_TOKEN}/catalog/movie/puzzle-search/search={encoded}.json"
        )

        assert resp.status_code == 200
        catalog.search.assert_awaited_once_with(term)

    def test_query_string_search(self) -> None:
        catalog = _catalog_uc([Candidate(slug="alien-1979", title="Alien", year=1979)])
        client = TestClient(_make_app(catalog=catalog))

        resp = client.get(
            f"/{_TOKEN}/catalog/movie/puzzle-search.json", params={"search": "Alien"}
        )

        assert resp.json()["metas"][0]["id"] == "puzzle:alien-1979"
        catalog.search.assert_awaited_once_with("Alien")

    def test_no_search_term(self) -> None:
        catalog = _catalog_uc([])
        client = TestClient(_make_app(catalog=catalog))

        resp = client.get(f"/{_TOKEN}/catalog/movie/puzzle-search.json")

        assert resp.json() == {"metas": []}
        catalog.search.assert_not_awaited()

    def test_other_catalog_or_type(self) -> None:
        catalog = _catalog_uc([Candidate(slug="x-2000", title="X")])
        client = TestClient(_make_app(catalog=catalog))

        assert client.get(
            f"/{_TOKEN}/catalog/series/puzzle-search/search=x.json"
        ).json() == {"metas": []}
        assert client.get(
            f"/{_TOKEN}/catalog/movie/other/search=x.json"
        ).json() == {"metas": []}
        catalog.search.assert_not_awaited()

    def test_use_case_failure_degrades(self) -> None:
        catalog = AsyncMock()
        catalog.search = AsyncMock(side_effect=RuntimeError("boom"))
        client = TestClient(_make_app(catalog=catalog))

        resp = client.get(f"/{_TOKEN}/catalog/movie/puzzle-search/search=x.json")

        assert resp.status_code == 200
        assert resp.json() == {"metas": []}

    def test_missing_token(self) -> None:
        resp = TestClient(_make_app()).get("/bad/catalog/movie/puzzle-search.json")
        assert resp.status_code == 400


class TestMetaEndpoint:
    def test_meta_found(self) -> None:
        addon = AsyncMock()
        addon.meta = AsyncMock(
            return_value=StremioMeta(id="puzzle:alien-1979", name="alien-1979", hls=_HLS)
        )
        client = TestClient(_make_app(addon=addon))

        resp = client.get(f"/{_TOKEN}/meta/movie/puzzle:alien-1979.json")

        assert resp.json() == {
            "meta": {
                "id": "puzzle:alien-1979",
                "type": "movie",
                "name": "alien-1979",
                "hls": _HLS,
            }
        }
        addon.meta.assert_awaited_once_with("puzzle:alien-1979")

    def test_meta_without_stream_has_null_hls(self) -> None:
        addon = AsyncMock()
        addon.meta = AsyncMock(return_value=StremioMeta(id="tt1", name="Film"))
        client = TestClient(_make_app(addon=addon))

        resp = client.get(f"/{_TOKEN}/meta/movie/tt1.json")

        assert resp.json()["meta"]["hls"] is None

    def test_meta_unknown(self) -> None:
        addon = AsyncMock()
        addon.meta = AsyncMock(return_value=None)
        client = TestClient(_make_app(addon=addon))

        assert client.get(f"/{_TOKEN}/meta/movie/tt9.json").json() == {"meta": {}}


class TestStreamEndpoint:
    def test_stream_found(self) -> None:
        addon = AsyncMock()
        addon.streams = AsyncMock(return_value=[StremioStream(url=_HLS)])
        client = TestClient(_make_app(addon=addon))

        resp = client.get(f"/{_TOKEN}/stream/movie/tt0084787.json")

        assert resp.status_code == 200
        assert resp.json() == {
            "streams": [
                {"url": _HLS, "title": "Puzzle-Movies (HLS)", "isFree": True}
            ]
        }
        addon.streams.assert_awaited_once_with("tt0084787")

    def test_no_stream(self) -> None:
        addon = AsyncMock()
        addon.streams = AsyncMock(return_value=[])
        client = TestClient(_make_app(addon=addon))

        assert client.get(f"/{_TOKEN}/stream/movie/tmdb:1091.json").json() == {
            "streams": []
        }

    def test_use_case_failure_degrades(self) -> None:
        addon = AsyncMock()
        addon.streams = AsyncMock(side_effect=RuntimeError("boom"))
        client = TestClient(_make_app(addon=addon))

        resp = client.get(f"/{_TOKEN}/stream/movie/tt1.json")

        assert resp.status_code == 200
        assert resp.json() == {"streams": []}

    def test_missing_token(self) -> None:
        resp = TestClient(_make_app()).get("/x/stream/movie/tt1.json")
        assert resp.status_code == 400
        assert resp.json() == {"err": "missing cookies"}
