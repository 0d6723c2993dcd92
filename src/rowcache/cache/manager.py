# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Provider factories and the process-wide provider singleton.

:func:`create_provider` and :func:`create_async_provider` bind a namespace
to a freshly opened SQLite connection using the application settings.
:func:`get_cache_provider` keeps one blocking provider per process, the
way most callers want to use it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rowcache.cache.provider import AsyncSQLiteCachingProvider, SQLiteCachingProvider

if TYPE_CHECKING:
    from rowcache.core.config import Settings

logger = logging.getLogger("rowcache.cache.manager")

# Module-level singleton
_provider: SQLiteCachingProvider | None = None


def _resolve(settings: Settings | None, name: str | None) -> tuple[Settings, str]:
    if settings is None:
        from rowcache.core.config import get_settings

        settings = get_settings()
    return settings, name or settings.namespace


def create_provider(
    settings: Settings | None = None,
    *,
    name: str | None = None,
    diagnostics: logging.Logger | None = None,
) -> SQLiteCachingProvider:
    """Open the configured database and return a blocking provider.

    Args:
        settings: Application settings; loaded from the environment if ``None``.
        name: Namespace override; defaults to ``settings.namespace``.
        diagnostics: Logger for hit/miss/write lines.
    """
    from rowcache.storage.database import init_backend

    settings, namespace = _resolve(settings, name)
    backend = init_backend(
        settings.db_path,
        timeout=settings.busy_timeout,
        journal_mode=settings.journal_mode,
    )
    logger.debug("Created provider %r on %s", namespace, settings.db_path)
    return SQLiteCachingProvider(
        namespace, backend, settings.caching_options(), diagnostics=diagnostics
    )


async def create_async_provider(
    settings: Settings | None = None,
    *,
    name: str | None = None,
    diagnostics: logging.Logger | None = None,
) -> AsyncSQLiteCachingProvider:
    """Async counterpart of :func:`create_provider`."""
    from rowcache.storage.database import init_async_backend

    settings, namespace = _resolve(settings, name)
    backend = await init_async_backend(
        settings.db_path,
        timeout=settings.busy_timeout,
        journal_mode=settings.journal_mode,
    )
    logger.debug("Created async provider %r on %s", namespace, settings.db_path)
    return AsyncSQLiteCachingProvider(
        namespace, backend, settings.caching_options(), diagnostics=diagnostics
    )


def get_cache_provider() -> SQLiteCachingProvider:
    """Return the module-level :class:`SQLiteCachingProvider` singleton.

    Creates a new instance on first call using application settings.
    """
    global _provider
    if _provider is None:
        _provider = create_provider()
    return _provider


def reset_cache_provider() -> None:
    """Close and forget the singleton (useful for testing)."""
    global _provider
    if _provider is not None:
        _provider.close()
    _provider = None
