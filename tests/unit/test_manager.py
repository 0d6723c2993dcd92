# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for settings, provider factories and the provider singleton."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from rowcache.cache.manager import (
    create_async_provider,
    create_provider,
    get_cache_provider,
    reset_cache_provider,
)
from rowcache.cache.options import CachingOptions
from rowcache.cache.provider import AsyncSQLiteCachingProvider, SQLiteCachingProvider
from rowcache.core.config import Settings, get_settings
from rowcache.core.constants import DEFAULT_PROVIDER_NAME, ProviderType
from rowcache.core.exceptions import ConfigurationError

TTL = timedelta(seconds=60)


@pytest.fixture
def db_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    db_path = tmp_path / "cache.db"
    monkeypatch.setenv("ROWCACHE_DB_PATH", str(db_path))
    return db_path


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("ROWCACHE_NAMESPACE", "ROWCACHE_MAX_RANDOM_SECOND", "ROWCACHE_PROVIDER_TYPE"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.namespace == DEFAULT_PROVIDER_NAME
        assert settings.provider_type == ProviderType.SQLITE
        assert settings.journal_mode == "WAL"
        assert settings.max_random_second == 0
        assert settings.enable_logging is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROWCACHE_NAMESPACE", "orders")
        monkeypatch.setenv("ROWCACHE_MAX_RANDOM_SECOND", "15")
        monkeypatch.setenv("ROWCACHE_ENABLE_LOGGING", "true")
        monkeypatch.setenv("ROWCACHE_JOURNAL_MODE", "delete")
        settings = get_settings()
        assert settings.namespace == "orders"
        assert settings.max_random_second == 15
        assert settings.enable_logging is True
        assert settings.journal_mode == "DELETE"

    def test_blank_namespace_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(namespace="   ")

    def test_caching_options(self) -> None:
        settings = Settings(order=2, max_random_second=5, enable_logging=True)
        assert settings.caching_options() == CachingOptions(
            order=2, max_random_second=5, enable_logging=True
        )

    def test_negative_jitter_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(max_random_second=-1).caching_options()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


class TestCreateProvider:
    def test_creates_blocking_provider(self, tmp_path: Path) -> None:
        settings = Settings(db_path=tmp_path / "c.db", namespace="orders", order=4)
        provider = create_provider(settings)
        try:
            assert isinstance(provider, SQLiteCachingProvider)
            assert provider.name == "orders"
            assert provider.order == 4
            provider.set("k", 1, TTL)
            assert provider.get("k").value == 1
        finally:
            provider.close()
        assert (tmp_path / "c.db").exists()

    def test_name_override(self, tmp_path: Path) -> None:
        settings = Settings(db_path=tmp_path / "c.db")
        provider = create_provider(settings, name="other")
        assert provider.name == "other"
        provider.close()

    def test_data_survives_reopen(self, tmp_path: Path) -> None:
        settings = Settings(db_path=tmp_path / "c.db")
        first = create_provider(settings)
        first.set("k", "persisted", TTL)
        first.close()
        second = create_provider(settings)
        assert second.get("k").value == "persisted"
        second.close()

    @pytest.mark.parametrize("provider_type", ["redis", "in_memory", "memcached"])
    def test_unsupported_provider_type(
        self, monkeypatch: pytest.MonkeyPatch, provider_type: str
    ) -> None:
        monkeypatch.setenv("ROWCACHE_PROVIDER_TYPE", provider_type)
        with pytest.raises(ValidationError):
            get_settings()
        with pytest.raises(ValidationError):
            CachingOptions(provider_type=provider_type)  # type: ignore[arg-type]
        assert [p.value for p in ProviderType] == ["sqlite"]

    def test_bad_journal_mode(self, tmp_path: Path) -> None:
        settings = Settings(db_path=tmp_path / "c.db", journal_mode="bogus")
        with pytest.raises(ConfigurationError, match="journal mode"):
            create_provider(settings)

    async def test_creates_async_provider(self, tmp_path: Path) -> None:
        settings = Settings(db_path=tmp_path / "c.db", namespace="async-ns")
        provider = await create_async_provider(settings)
        try:
            assert isinstance(provider, AsyncSQLiteCachingProvider)
            assert provider.name == "async-ns"
            await provider.set("k", [1, 2], TTL)
            assert (await provider.get("k")).value == [1, 2]
        finally:
            await provider.close()

    async def test_sync_and_async_share_storage(self, tmp_path: Path) -> None:
        settings = Settings(db_path=tmp_path / "c.db")
        sync_provider = create_provider(settings)
        sync_provider.set("k", "shared", TTL)
        sync_provider.close()

        async_provider = await create_async_provider(settings)
        assert (await async_provider.get("k")).value == "shared"
        await async_provider.close()


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------


class TestSingleton:
    def test_same_instance(self, db_env: Path) -> None:
        first = get_cache_provider()
        second = get_cache_provider()
        assert first is second
        assert db_env.exists()

    def test_reset_creates_new_instance(self, db_env: Path) -> None:
        first = get_cache_provider()
        first.set("k", 1, TTL)
        reset_cache_provider()
        second = get_cache_provider()
        assert second is not first
        assert second.get("k").value == 1

    def test_reset_without_instance_is_noop(self) -> None:
        reset_cache_provider()
        reset_cache_provider()
