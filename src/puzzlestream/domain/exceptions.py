"""Domain exceptions."""

from __future__ import annotations


class PuzzleStreamError(Exception):
    """Base class for all puzzlestream errors."""


class RemoteUnavailable(PuzzleStreamError):
    """Raised when the remote site cannot be reached or answers non-2xx.

    Covers network errors, timeouts and HTTP status errors alike.
    """

    def __init__(self, url: str, *, status: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"status={status}" if status is not None else reason or "transport error"
        super().__init__(f"remote unavailable: {url} ({detail})")


class ConfigurationError(PuzzleStreamError):
    """Raised when a request lacks usable configuration (e.g. no cookies)."""
