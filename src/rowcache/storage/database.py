# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database connection management for the cache table.

Opens blocking (:mod:`sqlite3`) and async (:mod:`aiosqlite`) connections
in autocommit mode, applies the journal-mode pragma, and creates the cache
table if it is missing.  The schema is never migrated.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

import aiosqlite

from rowcache.core.exceptions import ConfigurationError, StorageError
from rowcache.storage import statements
from rowcache.storage.sqlite_backend import AsyncSQLiteBackend, SQLiteBackend

logger = logging.getLogger("rowcache.storage.database")

_JOURNAL_MODES = frozenset({"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"})


def _check_journal_mode(journal_mode: str) -> str:
    mode = journal_mode.upper()
    if mode not in _JOURNAL_MODES:
        msg = f"Unknown journal mode: {journal_mode!r}. Expected one of {sorted(_JOURNAL_MODES)}."
        raise ConfigurationError(msg)
    return mode


# ---------------------------------------------------------------------------
# Blocking connections
# ---------------------------------------------------------------------------


def open_connection(
    db_path: Path | str = "rowcache.db",
    *,
    timeout: float = 5.0,
    journal_mode: str = "WAL",
) -> sqlite3.Connection:
    """Open a :mod:`sqlite3` connection and make sure the cache table exists.

    The connection may be shared between threads; transactions are
    serialized by :class:`~rowcache.storage.sqlite_backend.SQLiteBackend`.
    """
    mode = _check_journal_mode(journal_mode)
    try:
        conn = sqlite3.connect(
            str(db_path),
            timeout=timeout,
            isolation_level=None,
            check_same_thread=False,
        )
    except sqlite3.Error as exc:
        msg = f"Failed to open database at {db_path}: {exc}"
        raise StorageError(msg) from exc

    try:
        conn.row_factory = sqlite3.Row
        conn.execute(f"PRAGMA journal_mode={mode}")
        conn.execute(statements.CREATE_TABLE)
        conn.execute(statements.CREATE_NAME_INDEX)
    except sqlite3.Error as exc:
        conn.close()
        msg = f"Failed to initialize database at {db_path}: {exc}"
        raise StorageError(msg) from exc

    logger.debug("Opened cache database at %s (journal_mode=%s)", db_path, mode)
    return conn


def init_backend(
    db_path: Path | str = "rowcache.db",
    *,
    timeout: float = 5.0,
    journal_mode: str = "WAL",
) -> SQLiteBackend:
    """Return a ready-to-use blocking backend for *db_path*."""
    return SQLiteBackend(open_connection(db_path, timeout=timeout, journal_mode=journal_mode))


# ---------------------------------------------------------------------------
# Async connections
# ---------------------------------------------------------------------------


async def open_async_connection(
    db_path: Path | str = "rowcache.db",
    *,
    timeout: float = 5.0,
    journal_mode: str = "WAL",
) -> aiosqlite.Connection:
    """Open an :mod:`aiosqlite` connection and make sure the cache table exists."""
    mode = _check_journal_mode(journal_mode)
    try:
        conn = await aiosqlite.connect(str(db_path), timeout=timeout, isolation_level=None)
    except sqlite3.Error as exc:
        msg = f"Failed to open database at {db_path}: {exc}"
        raise StorageError(msg) from exc

    try:
        conn.row_factory = aiosqlite.Row
        await conn.execute(f"PRAGMA journal_mode={mode}")
        await conn.execute(statements.CREATE_TABLE)
        await conn.execute(statements.CREATE_NAME_INDEX)
    except sqlite3.Error as exc:
        await conn.close()
        msg = f"Failed to initialize database at {db_path}: {exc}"
        raise StorageError(msg) from exc

    logger.debug("Opened async cache database at %s (journal_mode=%s)", db_path, mode)
    return conn


async def init_async_backend(
    db_path: Path | str = "rowcache.db",
    *,
    timeout: float = 5.0,
    journal_mode: str = "WAL",
) -> AsyncSQLiteBackend:
    """Return a ready-to-use async backend for *db_path*."""
    conn = await open_async_connection(db_path, timeout=timeout, journal_mode=journal_mode)
    return AsyncSQLiteBackend(conn)
