"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from puzzlestream.infrastructure.puzzle.session import SiteSessionConfig

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _validate_base_url(value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"base URL must be http(s): {value!r}")
    return value.rstrip("/")


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    YAML is expected to be sectioned (http/site/cinemeta/logging).
    Environment variables are read by EnvOverrides so that load.py keeps
    strict precedence control (defaults < YAML < ENV < CLI).
    """

    # General
    app_name: str = Field(default="puzzlestream", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP towards the movie site (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=8.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-call timeout for site requests (seconds).",
    )
    http_user_agent: str = Field(
        default="Mozilla/5.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent sent to the movie site.",
    )

    # Movie site (YAML section: site.*)
    site_base_url: str = Field(
        default="https://puzzle-movies.com",
        validation_alias=AliasChoices(
            "site_base_url",
            AliasPath("site", "base_url"),
        ),
        description="Base origin of the cookie-authenticated movie site.",
    )

    # Metadata bridge (YAML section: cinemeta.*)
    cinemeta_base_url: str = Field(
        default="https://v3-cinemeta.strem.io",
        validation_alias=AliasChoices(
            "cinemeta_base_url",
            AliasPath("cinemeta", "base_url"),
        ),
        description="Cinemeta endpoint used to map IMDb/TMDB ids to titles.",
    )
    cinemeta_timeout_seconds: float = Field(
        default=8.0,
        validation_alias=AliasChoices(
            "cinemeta_timeout_seconds",
            AliasPath("cinemeta", "timeout_seconds"),
        ),
        description="Timeout for Cinemeta lookups (seconds).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("http_timeout_seconds", "cinemeta_timeout_seconds")
    @classmethod
    def _validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("site_base_url", "cinemeta_base_url")
    @classmethod
    def _validate_urls(cls, v: str) -> str:
        return _validate_base_url(v)

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def site_session(self) -> SiteSessionConfig:
        return SiteSessionConfig(
            base_url=self.site_base_url,
            user_agent=self.http_user_agent,
            timeout_seconds=self.http_timeout_seconds,
        )

    def to_sectioned_dict(self) -> dict[str, Any]:
        """Dump configuration in the sectioned shape used by config.yaml."""
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "site": {"base_url": self.site_base_url},
            "cinemeta": {
                "base_url": self.cinemeta_base_url,
                "timeout_seconds": self.cinemeta_timeout_seconds,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env vars (flat, explicit):
    - PUZZLESTREAM_ENVIRONMENT
    - PUZZLESTREAM_HTTP_TIMEOUT_SECONDS
    - PUZZLESTREAM_SITE_BASE_URL
    - PUZZLESTREAM_CINEMETA_BASE_URL
    - PUZZLESTREAM_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="PUZZLESTREAM_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    site_base_url: Optional[str] = None

    cinemeta_base_url: Optional[str] = None
    cinemeta_timeout_seconds: Optional[float] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """Return only values that were actually provided (non-None)."""
        return self.model_dump(exclude_none=True)
