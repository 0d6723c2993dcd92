# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from rowcache.cache.options import CachingOptions
from rowcache.cache.provider import AsyncSQLiteCachingProvider, SQLiteCachingProvider
from rowcache.storage.database import init_async_backend, init_backend
from rowcache.storage.sqlite_backend import AsyncSQLiteBackend, SQLiteBackend

NAMESPACE = "test-ns"


class FakeClock:
    """Manually advanced stand-in for :func:`time.time`."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend():
    """Blocking backend over an in-memory database."""
    b = init_backend(":memory:")
    yield b
    b.close()


@pytest.fixture
def provider(backend: SQLiteBackend, clock: FakeClock) -> SQLiteCachingProvider:
    return SQLiteCachingProvider(NAMESPACE, backend, CachingOptions(), clock=clock)


@pytest.fixture
async def async_backend():
    """Async backend over an in-memory database."""
    b = await init_async_backend(":memory:")
    yield b
    await b.close()


@pytest.fixture
def async_provider(
    async_backend: AsyncSQLiteBackend, clock: FakeClock
) -> AsyncSQLiteCachingProvider:
    return AsyncSQLiteCachingProvider(NAMESPACE, async_backend, CachingOptions(), clock=clock)


@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset the provider singleton between tests."""
    from rowcache.cache.manager import reset_cache_provider

    reset_cache_provider()
    yield
    reset_cache_provider()
