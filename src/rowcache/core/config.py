# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rowcache.cache.options import CachingOptions
from rowcache.core.constants import DEFAULT_PROVIDER_NAME, ProviderType


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ROWCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Database
    db_path: Path = Path("rowcache.db")
    busy_timeout: float = 5.0  # seconds sqlite waits on a locked database
    journal_mode: str = "WAL"

    # Provider
    namespace: str = DEFAULT_PROVIDER_NAME
    provider_type: ProviderType = ProviderType.SQLITE
    order: int = 0
    max_random_second: int = 0
    enable_logging: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("namespace must not be empty")
        return v

    @field_validator("journal_mode", mode="before")
    @classmethod
    def _normalise_journal_mode(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    def caching_options(self) -> CachingOptions:
        """Return the provider option bundle derived from these settings."""
        return CachingOptions(
            provider_type=self.provider_type,
            order=self.order,
            max_random_second=self.max_random_second,
            enable_logging=self.enable_logging,
        )


def get_settings() -> Settings:
    return Settings()
