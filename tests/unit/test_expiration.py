# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for TTL validation and the jittered expiration policy."""

from __future__ import annotations

from datetime import timedelta

import pytest

from rowcache.cache.expiration import ExpirationPolicy, ttl_seconds
from rowcache.core.exceptions import InvalidArgumentError, InvalidExpirationError

# ---------------------------------------------------------------------------
# ttl_seconds
# ---------------------------------------------------------------------------


class TestTtlSeconds:
    def test_int_seconds(self) -> None:
        assert ttl_seconds(30) == 30

    def test_timedelta(self) -> None:
        assert ttl_seconds(timedelta(minutes=2)) == 120

    def test_fraction_rounds_up(self) -> None:
        assert ttl_seconds(0.2) == 1
        assert ttl_seconds(timedelta(milliseconds=1500)) == 2

    @pytest.mark.parametrize("ttl", [0, -1, 0.0, timedelta(0), timedelta(seconds=-5)])
    def test_non_positive_rejected(self, ttl: object) -> None:
        with pytest.raises(InvalidExpirationError):
            ttl_seconds(ttl)  # type: ignore[arg-type]

    @pytest.mark.parametrize("ttl", [None, "10", True, float("inf"), float("nan")])
    def test_invalid_types_rejected(self, ttl: object) -> None:
        with pytest.raises(InvalidExpirationError):
            ttl_seconds(ttl)  # type: ignore[arg-type]

    def test_is_an_invalid_argument(self) -> None:
        assert issubclass(InvalidExpirationError, InvalidArgumentError)


# ---------------------------------------------------------------------------
# ExpirationPolicy
# ---------------------------------------------------------------------------


class TestExpirationPolicy:
    def test_no_jitter_by_default(self) -> None:
        policy = ExpirationPolicy(clock=lambda: 1000.9)
        assert policy.jitter() == 0
        assert policy.expires_at(60) == 1060

    def test_explicit_now(self) -> None:
        policy = ExpirationPolicy(clock=lambda: 1000.0)
        assert policy.expires_at(timedelta(seconds=5), now=2000) == 2005

    def test_jitter_within_bounds(self) -> None:
        policy = ExpirationPolicy(3, clock=lambda: 0.0, seed=42)
        offsets = {policy.expires_at(10) - 10 for _ in range(500)}
        assert offsets <= {1, 2, 3}
        assert offsets == {1, 2, 3}

    def test_jitter_of_one_is_always_one(self) -> None:
        policy = ExpirationPolicy(1, clock=lambda: 0.0)
        assert all(policy.jitter() == 1 for _ in range(20))

    def test_seed_makes_jitter_reproducible(self) -> None:
        a = ExpirationPolicy(100, seed=7)
        b = ExpirationPolicy(100, seed=7)
        assert [a.jitter() for _ in range(10)] == [b.jitter() for _ in range(10)]

    def test_negative_bound_rejected(self) -> None:
        with pytest.raises(InvalidExpirationError):
            ExpirationPolicy(-1)

    def test_invalid_ttl_rejected(self) -> None:
        policy = ExpirationPolicy(5)
        with pytest.raises(InvalidExpirationError):
            policy.expires_at(0)
