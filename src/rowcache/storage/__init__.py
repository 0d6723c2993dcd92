# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Storage layer -- the SQLite row store behind the cache providers."""

from rowcache.storage.backend import CacheRow, DatabaseBackend, SyncDatabaseBackend
from rowcache.storage.database import (
    init_async_backend,
    init_backend,
    open_async_connection,
    open_connection,
)
from rowcache.storage.sqlite_backend import AsyncSQLiteBackend, SQLiteBackend

__all__ = [
    "AsyncSQLiteBackend",
    "CacheRow",
    "DatabaseBackend",
    "SQLiteBackend",
    "SyncDatabaseBackend",
    "init_async_backend",
    "init_backend",
    "open_async_connection",
    "open_connection",
]
