# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Hit/miss counters owned by a single provider instance."""

from __future__ import annotations

import threading


class CacheStats:
    """Thread-safe hit/miss counter.

    Counters only ever grow; nothing in the package resets them.
    """

    __slots__ = ("_hits", "_lock", "_misses")

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def on_hit(self, count: int = 1) -> None:
        with self._lock:
            self._hits += count

    def on_miss(self, count: int = 1) -> None:
        with self._lock:
            self._misses += count

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def total(self) -> int:
        with self._lock:
            return self._hits + self._misses

    @property
    def hit_rate(self) -> float:
        with self._lock:
            total = self._hits + self._misses
            return self._hits / total if total else 0.0

    def to_dict(self) -> dict[str, object]:
        with self._lock:
            hits, misses = self._hits, self._misses
        total = hits + misses
        return {
            "hits": hits,
            "misses": misses,
            "total": total,
            "hit_rate": round(hits / total, 4) if total else 0.0,
        }
