"""Settings resolution for RevenueCat clients."""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from revenuecat.utils.exceptions import ConfigurationError
from revenuecat.utils.types import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_PAGES,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
)


class ClientSettings(BaseSettings):
    """Client configuration loaded from ``REVENUECAT_*`` environment variables.

    Values passed to :func:`resolve_settings` take precedence over the
    environment and the optional ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="REVENUECAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    max_pages: int = Field(default=DEFAULT_MAX_PAGES, ge=1)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def resolve_settings(settings: ClientSettings | None = None, **overrides: Any) -> ClientSettings:
    """Build effective settings from an optional base plus explicit overrides.

    Args:
        settings: Base settings; read from the environment when omitted
        **overrides: Explicit values; None means "not given"

    Returns:
        ClientSettings with an API key present

    Raises:
        ConfigurationError: If no API key is configured anywhere
    """
    base = settings or ClientSettings()
    given = {key: value for key, value in overrides.items() if value is not None}

    # Init kwargs win over environment sources, and go through validation
    resolved = ClientSettings(**{**base.model_dump(), **given}) if given else base

    if resolved.api_key is None or not resolved.api_key.get_secret_value():
        raise ConfigurationError(
            "No RevenueCat API key configured. Pass api_key= or set REVENUECAT_API_KEY."
        )
    return resolved
