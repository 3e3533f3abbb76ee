"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - calendar_path, when set, is authoritative: an unreadable file is an error, not a fallback

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults for everything: the built-in dataset works with no configuration at all
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oxcal.core.domain_types import ConversionMode


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Term dataset
    calendar_path: str | None = None
    system_calendar_path: str = "/etc/oxford-calendar.yaml"

    @field_validator("calendar_path", mode="before")
    @classmethod
    def blank_path_is_unset(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Conversion
    default_mode: ConversionMode = ConversionMode.NEAREST

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
