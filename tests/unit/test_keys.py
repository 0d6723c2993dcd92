# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for key/prefix validation and GLOB pattern translation."""

from __future__ import annotations

import pytest

from rowcache.cache.keys import check_key, check_keys, check_prefix, prefix_pattern
from rowcache.core.exceptions import InvalidKeyError, InvalidPrefixError, InvalidValueError


class TestCheckKey:
    def test_valid_key_returned(self) -> None:
        assert check_key("user:1") == "user:1"

    def test_surrounding_spaces_kept(self) -> None:
        assert check_key(" a ") == " a "

    @pytest.mark.parametrize("key", [None, "", "   ", "\t\n", 42, b"bytes"])
    def test_invalid_keys(self, key: object) -> None:
        with pytest.raises(InvalidKeyError):
            check_key(key)


class TestCheckPrefix:
    def test_valid(self) -> None:
        assert check_prefix("user:") == "user:"

    @pytest.mark.parametrize("prefix", [None, "", "  "])
    def test_invalid(self, prefix: object) -> None:
        with pytest.raises(InvalidPrefixError):
            check_prefix(prefix)


class TestCheckKeys:
    def test_deduplicates_keeping_order(self) -> None:
        assert check_keys(["b", "a", "b", "c"]) == ["b", "a", "c"]

    def test_accepts_generators(self) -> None:
        assert check_keys(k for k in ("x", "y")) == ["x", "y"]

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidValueError):
            check_keys([])

    def test_bare_string_rejected(self) -> None:
        with pytest.raises(InvalidValueError):
            check_keys("abc")

    def test_blank_member_rejected(self) -> None:
        with pytest.raises(InvalidKeyError):
            check_keys(["ok", " "])


class TestPrefixPattern:
    def test_appends_wildcard(self) -> None:
        assert prefix_pattern("user:") == "user:*"

    def test_brackets_glob_metacharacters(self) -> None:
        assert prefix_pattern("a*b?c[d") == "a[*]b[?]c[[]d*"

    def test_like_characters_left_alone(self) -> None:
        assert prefix_pattern("50%_off]") == "50%_off]*"

    def test_blank_prefix_rejected(self) -> None:
        with pytest.raises(InvalidPrefixError):
            prefix_pattern(" ")
