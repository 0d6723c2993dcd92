# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite caching providers.

:class:`SQLiteCachingProvider` (blocking) and :class:`AsyncSQLiteCachingProvider`
(coroutines) expose the same operation set with the same semantics:

* Every key lives inside the provider's namespace (the ``name`` column).
* Expired rows are never returned, counted, or reported as existing, but
  they stay in the table until overwritten or removed.
* ``get`` and the batch reads update the provider's :class:`CacheStats`.
* ``set_all`` and ``remove_all`` run inside one transaction and either
  apply completely or not at all.
* ``try_set`` is a single conditional insert, so two callers racing for
  the same key cannot both win.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from typing import Any, TypeVar

from rowcache.cache import serialization
from rowcache.cache.expiration import TTL, ExpirationPolicy, ttl_seconds
from rowcache.cache.keys import check_key, check_keys, prefix_pattern
from rowcache.cache.options import CachingOptions
from rowcache.cache.stats import CacheStats
from rowcache.cache.value import CacheValue
from rowcache.core.constants import ProviderType
from rowcache.core.exceptions import ConfigurationError, InvalidValueError
from rowcache.core.logging import shorten_key
from rowcache.storage import statements
from rowcache.storage.backend import CacheRow, DatabaseBackend, SyncDatabaseBackend

logger = logging.getLogger("rowcache.cache.provider")

T = TypeVar("T")

# Keys per ``IN (...)`` lookup; keeps well under SQLite's bound-variable limit.
_BATCH_CHUNK = 500


def _chunks(items: list[str], size: int = _BATCH_CHUNK) -> Iterator[list[str]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


class _CachingProviderBase:
    """State and helpers shared by the blocking and async providers."""

    is_distributed = False

    def __init__(
        self,
        name: str,
        options: CachingOptions | None = None,
        *,
        diagnostics: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
        seed: int | None = None,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError("provider name (namespace) must be a non-blank string")
        self._name = name
        self._options = options or CachingOptions()
        self._log = diagnostics or logger
        self._stats = CacheStats()
        self._policy = ExpirationPolicy(
            self._options.max_random_second, clock=clock, seed=seed
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> CachingOptions:
        return self._options

    @property
    def provider_type(self) -> ProviderType:
        return self._options.provider_type

    @property
    def order(self) -> int:
        return self._options.order

    @property
    def max_random_second(self) -> int:
        return self._options.max_random_second

    @property
    def stats(self) -> CacheStats:
        """Return the hit/miss statistics object."""
        return self._stats

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _info(self, event: str, key: str) -> None:
        if self._options.enable_logging:
            self._log.info(
                "%s : cachekey = %s",
                event,
                shorten_key(key),
                extra={"cache_namespace": self._name},
            )

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def _single_result(self, key: str, row: CacheRow | None, value_type: Any) -> CacheValue[Any]:
        if row is None:
            self._stats.on_miss()
            self._info("Cache Missed", key)
            return CacheValue.no_value()
        self._stats.on_hit()
        self._info("Cache Hit", key)
        return CacheValue(serialization.decode(row.value, value_type), True)

    def _found(self, rows: Iterable[CacheRow], value_type: Any) -> dict[str, CacheValue[Any]]:
        return {
            row.key: CacheValue(serialization.decode(row.value, value_type), True)
            for row in rows
        }

    def _all_result(
        self, keys: list[str], rows: list[CacheRow], value_type: Any
    ) -> dict[str, CacheValue[Any]]:
        found = self._found(rows, value_type)
        result = {key: found.get(key, CacheValue.no_value()) for key in keys}
        hits = len(found)
        self._stats.on_hit(hits)
        self._stats.on_miss(len(keys) - hits)
        return result

    # ------------------------------------------------------------------
    # Write helpers
    # ------------------------------------------------------------------

    def _write_params(self, key: str, value: Any, ttl: TTL) -> tuple[Any, ...]:
        check_key(key)
        ttl_seconds(ttl)
        encoded = serialization.encode(value)
        return (self._name, key, encoded, self._policy.expires_at(ttl))

    def _try_set_params(self, key: str, value: Any, ttl: TTL) -> tuple[Any, ...]:
        check_key(key)
        ttl_seconds(ttl)
        encoded = serialization.encode(value)
        now = self._policy.now()
        return (self._name, key, encoded, self._policy.expires_at(ttl, now=now), now)

    def _batch_write_params(self, values: Mapping[str, Any], ttl: TTL) -> list[tuple[Any, ...]]:
        ttl_seconds(ttl)
        if not isinstance(values, Mapping) or not values:
            raise InvalidValueError("values must be a non-empty mapping")
        now = self._policy.now()
        params = []
        for key, value in values.items():
            check_key(key)
            encoded = serialization.encode(value)
            params.append((self._name, key, encoded, self._policy.expires_at(ttl, now=now)))
        return params

    def _count_query(self, prefix: str | None) -> tuple[str, tuple[Any, ...]]:
        now = self._policy.now()
        if prefix is None or (isinstance(prefix, str) and not prefix.strip()):
            return statements.COUNT_ALL, (self._name, now)
        return statements.COUNT_BY_PREFIX, (self._name, prefix_pattern(prefix), now)


class SQLiteCachingProvider(_CachingProviderBase):
    """Blocking cache provider over a :class:`SyncDatabaseBackend`.

    Args:
        name: Namespace this provider reads and writes.
        backend: Row store shared by every call on this provider.
        options: Behaviour switches; defaults to :class:`CachingOptions`.
        diagnostics: Logger receiving hit/miss/write lines when
            ``options.enable_logging`` is on.
        clock: Returns the current unix time.
        seed: Optional seed for the expiration jitter generator.
    """

    def __init__(
        self,
        name: str,
        backend: SyncDatabaseBackend,
        options: CachingOptions | None = None,
        *,
        diagnostics: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
        seed: int | None = None,
    ) -> None:
        super().__init__(name, options, diagnostics=diagnostics, clock=clock, seed=seed)
        self._backend = backend

    @property
    def backend(self) -> SyncDatabaseBackend:
        return self._backend

    # ------------------------------------------------------------------
    # Single-key operations
    # ------------------------------------------------------------------

    def exists(self, key: str) -> bool:
        """Return ``True`` if a live entry exists for *key*."""
        check_key(key)
        count = self._backend.scalar(statements.EXISTS, (self._name, key, self._policy.now()))
        return count > 0

    def get(self, key: str, value_type: Any = Any) -> CacheValue[Any]:
        """Return the cached value for *key* decoded as *value_type*.

        Counts exactly one hit or one miss.

        Raises:
            DecodeError: If the stored JSON does not fit *value_type*.
        """
        check_key(key)
        row = self._backend.fetch_one(statements.GET, (self._name, key, self._policy.now()))
        return self._single_result(key, row, value_type)

    def get_or_set(
        self,
        key: str,
        retriever: Callable[[], T | None],
        ttl: TTL,
        value_type: Any = Any,
    ) -> CacheValue[Any]:
        """Return the cached value, or compute, store and return it on a miss.

        When *retriever* returns ``None`` nothing is written and a
        not-found result is returned.  Two callers missing at the same
        time may both call *retriever*; the later write wins.
        """
        check_key(key)
        ttl_seconds(ttl)
        cached = self.get(key, value_type)
        if cached.has_value:
            return cached

        item = retriever()
        if item is None:
            return CacheValue.no_value()
        self.set(key, item, ttl)
        return CacheValue(item, True)

    def set(self, key: str, value: Any, ttl: TTL) -> None:
        """Store *value* under *key*, replacing any existing entry."""
        params = self._write_params(key, value, ttl)
        self._backend.execute(statements.SET, params)
        self._info("Cache Set", key)

    def try_set(self, key: str, value: Any, ttl: TTL) -> bool:
        """Store *value* only if *key* has no live entry.

        Returns:
            ``True`` if this call wrote the entry.
        """
        params = self._try_set_params(key, value, ttl)
        written = self._backend.execute(statements.TRY_SET, params) > 0
        if written:
            self._info("Cache TrySet", key)
        return written

    def refresh(self, key: str, value: Any, ttl: TTL) -> None:
        """Remove *key* and store *value* with a fresh TTL window."""
        self._write_params(key, value, ttl)
        self.remove(key)
        self.set(key, value, ttl)

    def remove(self, key: str) -> None:
        check_key(key)
        self._backend.execute(statements.REMOVE, (self._name, key))
        self._info("Cache Remove", key)

    # ------------------------------------------------------------------
    # Prefix operations
    # ------------------------------------------------------------------

    def remove_by_prefix(self, prefix: str) -> None:
        """Delete every entry whose key starts with *prefix*."""
        pattern = prefix_pattern(prefix)
        self._info("RemoveByPrefix", prefix)
        self._backend.execute(statements.REMOVE_BY_PREFIX, (self._name, pattern))

    def get_by_prefix(self, prefix: str, value_type: Any = Any) -> dict[str, CacheValue[Any]]:
        """Return every live entry whose key starts with *prefix*."""
        pattern = prefix_pattern(prefix)
        rows = self._backend.fetch_all(
            statements.GET_BY_PREFIX, (self._name, pattern, self._policy.now())
        )
        found = self._found(rows, value_type)
        self._stats.on_hit(len(found))
        return found

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    def set_all(self, values: Mapping[str, Any], ttl: TTL) -> None:
        """Store every pair of *values* in one transaction."""
        params = self._batch_write_params(values, ttl)
        with self._backend.transaction():
            for p in params:
                self._backend.execute(statements.SET, p)
        self._info("Cache SetAll", ",".join(values))

    def get_all(self, keys: Iterable[str], value_type: Any = Any) -> dict[str, CacheValue[Any]]:
        """Look up *keys*; every requested key appears once in the result."""
        wanted = check_keys(keys)
        now = self._policy.now()
        rows: list[CacheRow] = []
        for chunk in _chunks(wanted):
            rows.extend(
                self._backend.fetch_all(
                    statements.get_many(len(chunk)), (self._name, *chunk, now)
                )
            )
        return self._all_result(wanted, rows, value_type)

    def remove_all(self, keys: Iterable[str]) -> None:
        """Delete *keys* in one transaction."""
        wanted = check_keys(keys)
        with self._backend.transaction():
            for key in wanted:
                self._backend.execute(statements.REMOVE, (self._name, key))
        self._info("Cache RemoveAll", ",".join(wanted))

    # ------------------------------------------------------------------
    # Namespace-wide operations
    # ------------------------------------------------------------------

    def get_count(self, prefix: str | None = "") -> int:
        """Count live entries, optionally only those starting with *prefix*."""
        query, params = self._count_query(prefix)
        return self._backend.scalar(query, params)

    def flush(self) -> None:
        """Delete every entry in this provider's namespace."""
        self._backend.execute(statements.FLUSH, (self._name,))
        if self._options.enable_logging:
            self._log.info("Cache Flush", extra={"cache_namespace": self._name})

    def close(self) -> None:
        """Release the underlying backend."""
        self._backend.close()


class AsyncSQLiteCachingProvider(_CachingProviderBase):
    """Async cache provider over a :class:`DatabaseBackend`.

    Mirrors :class:`SQLiteCachingProvider` operation for operation; every
    method is a coroutine and suspends only while the backend runs SQL.
    """

    def __init__(
        self,
        name: str,
        backend: DatabaseBackend,
        options: CachingOptions | None = None,
        *,
        diagnostics: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
        seed: int | None = None,
    ) -> None:
        super().__init__(name, options, diagnostics=diagnostics, clock=clock, seed=seed)
        self._backend = backend

    @property
    def backend(self) -> DatabaseBackend:
        return self._backend

    # ------------------------------------------------------------------
    # Single-key operations
    # ------------------------------------------------------------------

    async def exists(self, key: str) -> bool:
        check_key(key)
        count = await self._backend.scalar(
            statements.EXISTS, (self._name, key, self._policy.now())
        )
        return count > 0

    async def get(self, key: str, value_type: Any = Any) -> CacheValue[Any]:
        check_key(key)
        row = await self._backend.fetch_one(
            statements.GET, (self._name, key, self._policy.now())
        )
        return self._single_result(key, row, value_type)

    async def get_or_set(
        self,
        key: str,
        retriever: Callable[[], Awaitable[T | None] | T | None],
        ttl: TTL,
        value_type: Any = Any,
    ) -> CacheValue[Any]:
        """Async cache-aside lookup; *retriever* may be sync or async."""
        check_key(key)
        ttl_seconds(ttl)
        cached = await self.get(key, value_type)
        if cached.has_value:
            return cached

        item = retriever()
        if inspect.isawaitable(item):
            item = await item
        if item is None:
            return CacheValue.no_value()
        await self.set(key, item, ttl)
        return CacheValue(item, True)

    async def set(self, key: str, value: Any, ttl: TTL) -> None:
        params = self._write_params(key, value, ttl)
        await self._backend.execute(statements.SET, params)
        self._info("Cache Set", key)

    async def try_set(self, key: str, value: Any, ttl: TTL) -> bool:
        params = self._try_set_params(key, value, ttl)
        written = await self._backend.execute(statements.TRY_SET, params) > 0
        if written:
            self._info("Cache TrySet", key)
        return written

    async def refresh(self, key: str, value: Any, ttl: TTL) -> None:
        self._write_params(key, value, ttl)
        await self.remove(key)
        await self.set(key, value, ttl)

    async def remove(self, key: str) -> None:
        check_key(key)
        await self._backend.execute(statements.REMOVE, (self._name, key))
        self._info("Cache Remove", key)

    # ------------------------------------------------------------------
    # Prefix operations
    # ------------------------------------------------------------------

    async def remove_by_prefix(self, prefix: str) -> None:
        pattern = prefix_pattern(prefix)
        self._info("RemoveByPrefixAsync", prefix)
        await self._backend.execute(statements.REMOVE_BY_PREFIX, (self._name, pattern))

    async def get_by_prefix(
        self, prefix: str, value_type: Any = Any
    ) -> dict[str, CacheValue[Any]]:
        pattern = prefix_pattern(prefix)
        rows = await self._backend.fetch_all(
            statements.GET_BY_PREFIX, (self._name, pattern, self._policy.now())
        )
        found = self._found(rows, value_type)
        self._stats.on_hit(len(found))
        return found

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    async def set_all(self, values: Mapping[str, Any], ttl: TTL) -> None:
        params = self._batch_write_params(values, ttl)
        async with self._backend.transaction():
            for p in params:
                await self._backend.execute(statements.SET, p)
        self._info("Cache SetAll", ",".join(values))

    async def get_all(
        self, keys: Iterable[str], value_type: Any = Any
    ) -> dict[str, CacheValue[Any]]:
        wanted = check_keys(keys)
        now = self._policy.now()
        rows: list[CacheRow] = []
        for chunk in _chunks(wanted):
            rows.extend(
                await self._backend.fetch_all(
                    statements.get_many(len(chunk)), (self._name, *chunk, now)
                )
            )
        return self._all_result(wanted, rows, value_type)

    async def remove_all(self, keys: Iterable[str]) -> None:
        wanted = check_keys(keys)
        async with self._backend.transaction():
            for key in wanted:
                await self._backend.execute(statements.REMOVE, (self._name, key))
        self._info("Cache RemoveAll", ",".join(wanted))

    # ------------------------------------------------------------------
    # Namespace-wide operations
    # ------------------------------------------------------------------

    async def get_count(self, prefix: str | None = "") -> int:
        query, params = self._count_query(prefix)
        return await self._backend.scalar(query, params)

    async def flush(self) -> None:
        await self._backend.execute(statements.FLUSH, (self._name,))
        if self._options.enable_logging:
            self._log.info("Cache Flush", extra={"cache_namespace": self._name})

    async def close(self) -> None:
        await self._backend.close()

