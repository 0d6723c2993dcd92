# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache semantics layer: providers, expiration, keys and statistics."""

from rowcache.cache.manager import (
    create_async_provider,
    create_provider,
    get_cache_provider,
    reset_cache_provider,
)
from rowcache.cache.options import CachingOptions
from rowcache.cache.provider import AsyncSQLiteCachingProvider, SQLiteCachingProvider
from rowcache.cache.stats import CacheStats
from rowcache.cache.value import CacheValue

__all__ = [
    "AsyncSQLiteCachingProvider",
    "CacheStats",
    "CacheValue",
    "CachingOptions",
    "SQLiteCachingProvider",
    "create_async_provider",
    "create_provider",
    "get_cache_provider",
    "reset_cache_provider",
]
