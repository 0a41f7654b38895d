"""Shared fixtures for integration tests.

These tests wire the real site clients, use cases and router together;
only the network is replaced (``FakeSite`` transport, stub bridge).
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from puzzlestream.domain.entities.resolution import TitleMatchInfo
from tests.site_fakes import StubBridge

_ENV_VARS = (
    "PUZZLESTREAM_APP_NAME",
    "PUZZLESTREAM_ENVIRONMENT",
    "PUZZLESTREAM_HTTP_TIMEOUT_SECONDS",
    "PUZZLESTREAM_HTTP_USER_AGENT",
    "PUZZLESTREAM_SITE_BASE_URL",
    "PUZZLESTREAM_CINEMETA_BASE_URL",
    "PUZZLESTREAM_CINEMETA_TIMEOUT_SECONDS",
    "PUZZLESTREAM_LOG_LEVEL",
    "PUZZLESTREAM_LOG_FORMAT",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Remove every PUZZLESTREAM_* variable for the duration of a test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch


@pytest.fixture()
def bridge() -> StubBridge:
    return StubBridge(
        {
            "tt0084787": TitleMatchInfo("The Thing", 1982),
            "tt0000001": TitleMatchInfo("Obscure Film", 1975),
            "tt0000002": TitleMatchInfo("Nameless", None),
        }
    )
