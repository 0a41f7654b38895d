"""Cookie-authenticated HTTP session for puzzle-movies.com.

One session is opened per inbound request and bound to the cookie
carried by that request.  Nothing is shared between sessions.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx
import structlog

from puzzlestream.domain.exceptions import RemoteUnavailable

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://puzzle-movies.com"
DEFAULT_USER_AGENT = "Mozilla/5.0"
DEFAULT_TIMEOUT_SECONDS = 8.0


@dataclass(frozen=True)
class SiteSessionConfig:
    """Base origin, User-Agent and per-call timeout for the site."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


class PuzzleSession:
    """Async context manager wrapping an ``httpx.AsyncClient``.

    ``transport`` is only meant for tests (``httpx.MockTransport``).
    """

    def __init__(
        self,
        cookies: str,
        config: SiteSessionConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or SiteSessionConfig()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers={
                "Cookie": cookies,
                "User-Agent": self._config.user_agent,
            },
            timeout=self._config.timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def __aenter__(self) -> PuzzleSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_text(self, path: str, *, params: dict[str, Any] | None = None) -> str:
        """GET *path* relative to the base origin and return the body.

        Raises ``RemoteUnavailable`` on timeouts, network errors and
        non-2xx responses.
        """
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            log.warning("site_timeout", path=path)
            raise RemoteUnavailable(path, reason="timeout") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.warning("site_http_error", path=path, status=status)
            raise RemoteUnavailable(path, status=status) from exc
        except httpx.HTTPError as exc:
            log.warning("site_fetch_error", path=path, error=str(exc))
            raise RemoteUnavailable(path, reason=str(exc)) from exc
        return resp.text
