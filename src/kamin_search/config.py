"""Application configuration powered by Pydantic settings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Theme(str, Enum):
    """Colour schemes offered by the front-end."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        """Return the opposite scheme."""
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    api_host: str = Field(
        ...,
        alias="API_HOST",
        min_length=1,
        description="Scheme and host of the remote search service (e.g. http://localhost).",
    )
    api_port: int | None = Field(
        None,
        alias="API_PORT",
        ge=1,
        le=65535,
        description="Optional port appended to API_HOST as ':<port>'.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    allowed_origins_raw: str = Field(
        "",
        alias="ALLOWED_ORIGINS",
        description="Comma-separated list of origins allowed to access the API.",
    )
    notification_auto_hide_ms: int = Field(
        5000,
        alias="NOTIFICATION_AUTO_HIDE_MS",
        ge=0,
        description="Delay before a visible notification dismisses itself.",
    )
    notification_transition_ms: int = Field(
        400,
        alias="NOTIFICATION_TRANSITION_MS",
        ge=0,
        description="Duration of the notification enter and exit transitions.",
    )
    theme_cookie_days: int = Field(7, alias="THEME_COOKIE_DAYS", ge=1, le=365)
    default_theme: Theme = Field(Theme.LIGHT, alias="DEFAULT_THEME")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
    )

    @field_validator("api_port", mode="before")
    @classmethod
    def blank_port_is_unset(cls, value: object) -> object:
        """Treat ``API_PORT=`` as an omitted port.

        Container runtimes forward undefined variables as empty strings, which
        would otherwise fail integer validation.
        """
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("api_host", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Keep URL assembly independent of a trailing slash in API_HOST."""
        return value.strip().rstrip("/")

    @property
    def api_base_url(self) -> str:
        """Return the search service base URL (host plus optional port)."""
        if self.api_port is None:
            return self.api_host
        return f"{self.api_host}:{self.api_port}"

    @property
    def allowed_origins(self) -> List[str]:
        """Return the sanitized CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins_raw.split(",") if origin.strip()]

    @property
    def notification_auto_hide_seconds(self) -> float:
        return self.notification_auto_hide_ms / 1000

    @property
    def notification_transition_seconds(self) -> float:
        return self.notification_transition_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "Theme", "get_settings"]
