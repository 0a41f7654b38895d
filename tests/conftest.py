"""Shared test fixtures for the puzzlestream test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from puzzlestream.infrastructure.puzzle.session import PuzzleSession, SiteSessionConfig
from tests.site_fakes import SITE_URL, TEST_COOKIES, FakeSite


@pytest.fixture()
def fake_site() -> FakeSite:
    return FakeSite()


@pytest.fixture()
async def session(fake_site: FakeSite) -> AsyncIterator[PuzzleSession]:
    """PuzzleSession bound to the fake site."""
    async with PuzzleSession(
        TEST_COOKIES,
        SiteSessionConfig(base_url=SITE_URL),
        transport=fake_site.transport,
    ) as s:
        yield s
