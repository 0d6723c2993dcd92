# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Turns a relative TTL into the absolute expiration stored with a row.

Expirations are whole unix seconds.  When ``max_random_second`` is set, a
random ``1..max_random_second`` seconds are added on every write so that
entries written together do not all expire in the same second.
"""

from __future__ import annotations

import math
import random
import threading
import time
from collections.abc import Callable
from datetime import timedelta

from rowcache.core.exceptions import InvalidExpirationError

TTL = timedelta | int | float


def ttl_seconds(ttl: TTL) -> int:
    """Return *ttl* as a whole number of seconds, rounding fractions up.

    Raises:
        InvalidExpirationError: If *ttl* is not strictly positive.
    """
    if isinstance(ttl, bool) or not isinstance(ttl, timedelta | int | float):
        raise InvalidExpirationError(f"expiration must be a timedelta or a number, got {ttl!r}")
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    if not math.isfinite(seconds) or seconds <= 0:
        raise InvalidExpirationError(f"expiration must be positive, got {ttl!r}")
    return math.ceil(seconds)


class ExpirationPolicy:
    """Computes expiration instants for one provider.

    Args:
        max_random_second: Jitter bound in seconds; ``0`` disables jitter.
        clock: Returns the current unix time.  Tests substitute a fake.
        seed: Optional seed for the jitter generator.
    """

    def __init__(
        self,
        max_random_second: int = 0,
        *,
        clock: Callable[[], float] = time.time,
        seed: int | None = None,
    ) -> None:
        if max_random_second < 0:
            raise InvalidExpirationError("max_random_second must not be negative")
        self._max_random_second = max_random_second
        self._clock = clock
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    @property
    def max_random_second(self) -> int:
        return self._max_random_second

    def now(self) -> int:
        return int(self._clock())

    def jitter(self) -> int:
        if self._max_random_second <= 0:
            return 0
        with self._lock:
            return self._rng.randint(1, self._max_random_second)

    def expires_at(self, ttl: TTL, *, now: int | None = None) -> int:
        """Return the absolute expiration for a write happening at *now*."""
        seconds = ttl_seconds(ttl)
        base = self.now() if now is None else now
        return base + seconds + self.jitter()
