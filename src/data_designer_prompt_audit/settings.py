"""Settings for the remote analysis call, read from the environment or ``.env``."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PromptAuditSettings(BaseSettings):
    """Gemini connection settings.

    Attributes:
        api_key: Gemini API key (``GEMINI_API_KEY``). Without it the remote call
            is skipped and every result uses the deterministic fallback.
        model: Model name placed in the request path (``GEMINI_MODEL``).
        api_base: Base URL up to and including the API version (``GEMINI_API_BASE``).
        request_timeout: Seconds before the HTTP call gives up
            (``GEMINI_REQUEST_TIMEOUT``). Unset means no client-side timeout.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = None
    model: str = "gemini-2.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1alpha"
    request_timeout: float | None = Field(default=None, gt=0)


def get_settings() -> PromptAuditSettings:
    return PromptAuditSettings()
