# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract row-store interfaces used by the cache providers.

The blocking provider talks to a :class:`SyncDatabaseBackend` and the
async provider to a :class:`DatabaseBackend`.  Both expose the same four
capabilities: run a command, fetch rows, fetch a scalar, and group several
commands into one transaction.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator
from contextlib import AbstractAsyncContextManager, AbstractContextManager
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CacheRow:
    """A single live row of the cache table."""

    key: str
    value: str
    expires_at: int

    @classmethod
    def from_mapping(cls, row: Any) -> CacheRow:
        return cls(
            key=str(row["cachekey"]),
            value=str(row["cachevalue"]),
            expires_at=int(row["expiration"]),
        )


class SyncDatabaseBackend(abc.ABC):
    """Blocking counterpart of :class:`DatabaseBackend`."""

    @abc.abstractmethod
    def execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Execute a single SQL command and return the affected row count."""

    @abc.abstractmethod
    def fetch_one(self, query: str, params: tuple[Any, ...] = ()) -> CacheRow | None:
        """Execute a query and return the first row, or ``None``."""

    @abc.abstractmethod
    def fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[CacheRow]:
        """Execute a query and return all rows."""

    @abc.abstractmethod
    def scalar(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Execute a query and return the first column of the first row."""

    @abc.abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open a transaction that commits on exit and rolls back on error."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the underlying connection."""

    @property
    @abc.abstractmethod
    def backend_name(self) -> str:
        """Return the engine name, e.g. ``'sqlite'``."""


class DatabaseBackend(abc.ABC):
    """Abstract base class for async database backends.

    Concrete implementations wrap a connection and expose a uniform query
    interface.  All queries use ``?`` placeholders.
    """

    # ------------------------------------------------------------------
    # Query execution
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Execute a single SQL command.

        Args:
            query: SQL query string with ``?`` placeholders.
            params: Tuple of bind parameters.

        Returns:
            The number of rows changed by the command.
        """

    @abc.abstractmethod
    async def fetch_one(
        self, query: str, params: tuple[Any, ...] = ()
    ) -> CacheRow | None:
        """Execute a query and return the first row, or ``None``."""

    @abc.abstractmethod
    async def fetch_all(
        self, query: str, params: tuple[Any, ...] = ()
    ) -> list[CacheRow]:
        """Execute a query and return all rows."""

    @abc.abstractmethod
    async def scalar(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Execute a query and return the first column of the first row."""

    # ------------------------------------------------------------------
    # Transaction / connection lifecycle
    # ------------------------------------------------------------------

    @abc.abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction that commits on exit and rolls back on error."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def backend_name(self) -> str:
        """Return the engine name, e.g. ``'sqlite'``."""


def rows_from(raw_rows: Iterator[Any] | list[Any]) -> list[CacheRow]:
    """Decode raw driver rows into :class:`CacheRow` objects."""
    return [CacheRow.from_mapping(r) for r in raw_rows]
