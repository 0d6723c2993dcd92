# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Option bundle handed to a caching provider at construction time."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rowcache.core.constants import ProviderType


class CachingOptions(BaseModel):
    """Per-provider behaviour switches.

    Attributes:
        provider_type: Kind of store behind the provider.
        order: Priority when several providers are registered; lower wins.
        max_random_second: Upper bound of the random number of seconds
            added to every expiration.  ``0`` disables jitter.
        enable_logging: Emit an info line for hits, misses and writes.
    """

    model_config = ConfigDict(frozen=True)

    provider_type: ProviderType = ProviderType.SQLITE
    order: int = 0
    max_random_second: int = Field(default=0, ge=0)
    enable_logging: bool = False
