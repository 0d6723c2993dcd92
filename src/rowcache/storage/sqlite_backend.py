# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite implementations of the row-store interfaces.

:class:`SQLiteBackend` wraps a blocking :mod:`sqlite3` connection and
:class:`AsyncSQLiteBackend` wraps an :mod:`aiosqlite` connection.  Both
expect the connection to be in autocommit mode (``isolation_level=None``)
so that transactions are only ever opened by :meth:`transaction`.

Every call holds the backend's lock, so a statement issued while a batch
is open waits for it to commit or roll back instead of running inside it.

Driver errors are re-raised as :class:`~rowcache.core.exceptions.StorageError`.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import threading
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar
from typing import Any

import aiosqlite

from rowcache.core.exceptions import StorageError
from rowcache.storage.backend import CacheRow, DatabaseBackend, SyncDatabaseBackend, rows_from

logger = logging.getLogger("rowcache.storage.sqlite")

# Async backend whose transaction the current task is running, if any.
_active_transaction: ContextVar[AsyncSQLiteBackend | None] = ContextVar(
    "rowcache_active_transaction", default=None
)


def _storage_error(exc: Exception, query: str) -> StorageError:
    verb = query.strip().split(None, 1)[0].upper() if query.strip() else "?"
    return StorageError(f"SQLite {verb} failed: {exc}")


class SQLiteBackend(SyncDatabaseBackend):
    """Blocking SQLite backend backed by a :class:`sqlite3.Connection`.

    Every call takes an internal re-entrant lock.  The thread running a
    batch re-enters it for the batch's own statements; other threads wait
    until the batch has committed or rolled back.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._conn = connection
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    def execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        with self._lock:
            try:
                cursor = self._conn.execute(query, params)
            except sqlite3.Error as exc:
                raise _storage_error(exc, query) from exc
            try:
                return cursor.rowcount
            finally:
                cursor.close()

    def fetch_one(self, query: str, params: tuple[Any, ...] = ()) -> CacheRow | None:
        try:
            with self._lock:
                row = self._conn.execute(query, params).fetchone()
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc
        return CacheRow.from_mapping(row) if row is not None else None

    def fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[CacheRow]:
        try:
            with self._lock:
                raw = self._conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc
        return rows_from(raw)

    def scalar(self, query: str, params: tuple[Any, ...] = ()) -> int:
        try:
            with self._lock:
                row = self._conn.execute(query, params).fetchone()
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc
        return int(row[0]) if row is not None and row[0] is not None else 0

    # ------------------------------------------------------------------
    # Transaction / connection lifecycle
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            self.execute("BEGIN IMMEDIATE")
            try:
                yield
                self.execute("COMMIT")
            except BaseException:
                self._rollback()
                raise

    def _rollback(self) -> None:
        try:
            self._conn.execute("ROLLBACK")
        except sqlite3.Error:
            logger.exception("Rollback failed")

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def backend_name(self) -> str:
        return "sqlite"

    @property
    def raw_connection(self) -> sqlite3.Connection:
        """Return the underlying :class:`sqlite3.Connection`."""
        return self._conn


class AsyncSQLiteBackend(DatabaseBackend):
    """Async SQLite backend backed by an :class:`aiosqlite.Connection`.

    Every call waits on an :class:`asyncio.Lock`.  The task running a batch
    is marked in a context variable and passes straight through for the
    batch's own statements; other tasks wait until the batch is finished.
    """

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._conn = connection
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        if _active_transaction.get() is self:
            yield
        else:
            async with self._lock:
                yield

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    async def execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        try:
            async with self._guard(), self._conn.execute(query, params) as cursor:
                return cursor.rowcount
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc

    async def fetch_one(
        self, query: str, params: tuple[Any, ...] = ()
    ) -> CacheRow | None:
        try:
            async with self._guard(), self._conn.execute(query, params) as cursor:
                row = await cursor.fetchone()
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc
        return CacheRow.from_mapping(row) if row is not None else None

    async def fetch_all(
        self, query: str, params: tuple[Any, ...] = ()
    ) -> list[CacheRow]:
        try:
            async with self._guard(), self._conn.execute(query, params) as cursor:
                raw = await cursor.fetchall()
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc
        return rows_from(raw)

    async def scalar(self, query: str, params: tuple[Any, ...] = ()) -> int:
        try:
            async with self._guard(), self._conn.execute(query, params) as cursor:
                row = await cursor.fetchone()
        except sqlite3.Error as exc:
            raise _storage_error(exc, query) from exc
        return int(row[0]) if row is not None and row[0] is not None else 0

    # ------------------------------------------------------------------
    # Transaction / connection lifecycle
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._lock:
            token = _active_transaction.set(self)
            try:
                await self.execute("BEGIN IMMEDIATE")
                try:
                    yield
                    await self.execute("COMMIT")
                except BaseException:
                    await self._rollback()
                    raise
            finally:
                _active_transaction.reset(token)

    async def _rollback(self) -> None:
        try:
            await self._conn.execute("ROLLBACK")
        except sqlite3.Error:
            logger.exception("Rollback failed")

    async def close(self) -> None:
        async with self._guard():
            await self._conn.close()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def backend_name(self) -> str:
        return "sqlite"

    @property
    def raw_connection(self) -> aiosqlite.Connection:
        """Return the underlying :class:`aiosqlite.Connection`."""
        return self._conn
