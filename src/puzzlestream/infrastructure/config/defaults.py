"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "puzzlestream",
    "environment": "dev",
    "http": {
        "timeout_seconds": 8.0,
        "user_agent": "Mozilla/5.0",
    },
    "site": {
        "base_url": "https://puzzle-movies.com",
    },
    "cinemeta": {
        "base_url": "https://v3-cinemeta.strem.io",
        "timeout_seconds": 8.0,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
