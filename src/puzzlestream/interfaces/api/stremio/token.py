"""Addon token codec.

The install URL carries the user's settings as its first path segment:
``/<token>/manifest.json`` where ``token`` is base64url (unpadded) JSON
``{"cookies": "<raw Cookie header>"}``.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass

from puzzlestream.domain.exceptions import ConfigurationError


@dataclass(frozen=True)
class AddonSettings:
    cookies: str


def encode_token(cookies: str) -> str:
    payload = json.dumps({"cookies": cookies.strip()}).encode("utf-8")
    return base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")


def decode_token(segment: str) -> AddonSettings | None:
    """Decode a path segment; None for anything that is not a valid token."""
    if not segment:
        return None
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError):
        return None

    if not isinstance(data, dict):
        return None
    cookies = data.get("cookies")
    if not isinstance(cookies, str) or not cookies.strip():
        return None
    return AddonSettings(cookies=cookies.strip())


def require_settings(segment: str) -> AddonSettings:
    """Like ``decode_token`` but raises ``ConfigurationError`` when unusable."""
    settings = decode_token(segment)
    if settings is None:
        raise ConfigurationError("missing cookies")
    return settings
