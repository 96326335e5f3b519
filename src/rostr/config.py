"""
Rostr - Configuration and settings.

Settings are loaded from the environment (and an optional .env file).
Supabase fields are only required when the supabase storage backend is used.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class RostrSettings(BaseSettings):
    """Application settings for the onboarding/invite core."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    rostr_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Storage
    storage_backend: Literal["file", "memory", "supabase"] = "file"
    storage_path: Path = Path.home() / ".rostr" / "storage.json"
    device_id: str = "local-device"

    # Pending circle invites older than this are dropped on read
    invite_ttl_days: int = 7

    # Supabase (only for storage_backend="supabase")
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    @property
    def is_development(self) -> bool:
        return self.rostr_env == "development"

    @property
    def is_production(self) -> bool:
        return self.rostr_env == "production"

    @property
    def invite_ttl_ms(self) -> int:
        return self.invite_ttl_days * 24 * 60 * 60 * 1000


@lru_cache
def get_settings() -> RostrSettings:
    """Get cached settings instance."""
    return RostrSettings()
