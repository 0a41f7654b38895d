"""Tests for manifest URL extraction from film pages."""

from __future__ import annotations

import pytest

from puzzlestream.domain.exceptions import RemoteUnavailable
from puzzlestream.infrastructure.puzzle.session import PuzzleSession
from puzzlestream.infrastructure.puzzle.stream_extractor import (
    StreamExtractor,
    extract_manifest_url,
)
from tests.site_fakes import FakeSite, film_page

_HLS = "https://cdn.puzzle-movies.com/hls/the-thing-1982/master.m3u8"


class TestExtractManifestUrl:
    def test_double_quotes(self) -> None:
        assert extract_manifest_url(f'{{hlsUrl: "{_HLS}"}}') == _HLS

    def test_single_quotes(self) -> None:
        assert extract_manifest_url(f"{{hlsUrl:'{_HLS}'}}") == _HLS

    def test_assignment(self) -> None:
        assert extract_manifest_url(f'var hlsUrl = "{_HLS}";') == _HLS

    def test_first_assignment_wins(self) -> None:
        html = f'hlsUrl: "{_HLS}", backup: {{hlsUrl: "https://x/other.m3u8"}}'
        assert extract_manifest_url(html) == _HLS

    def test_non_manifest_value_ignored(self) -> None:
        assert extract_manifest_url('hlsUrl: "https://cdn/video.mp4"') is None

    def test_no_assignment(self) -> None:
        assert extract_manifest_url("<html><body>Please log in</body></html>") is None

    def test_empty(self) -> None:
        assert extract_manifest_url("") is None

    def test_result_ends_with_manifest_extension(self) -> None:
        url = extract_manifest_url(film_page(_HLS))
        assert url is not None
        assert url.endswith(".m3u8")


class TestStreamExtractor:
    async def test_extracts_from_film_page(
        self, fake_site: FakeSite, session: PuzzleSession
    ) -> None:
        fake_site.add("/films/the-thing-1982", film_page(_HLS))

        url = await StreamExtractor(session).extract_stream("the-thing-1982")

        assert url == _HLS
        assert fake_site.paths() == ["/films/the-thing-1982"]

    async def test_page_without_manifest_returns_none(
        self, fake_site: FakeSite, session: PuzzleSession
    ) -> None:
        fake_site.add("/films/the-thing-1982", film_page(None))

        assert await StreamExtractor(session).extract_stream("the-thing-1982") is None

    async def test_missing_page_raises(
        self, fake_site: FakeSite, session: PuzzleSession
    ) -> None:
        with pytest.raises(RemoteUnavailable) as exc_info:
            await StreamExtractor(session).extract_stream("no-such-film-2000")
        assert exc_info.value.status == 404
