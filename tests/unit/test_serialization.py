# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the pydantic-backed JSON codec."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import BaseModel

from rowcache.cache.serialization import decode, encode
from rowcache.core.exceptions import DecodeError, InvalidValueError


class User(BaseModel):
    id: int
    name: str


@dataclass
class Point:
    x: int
    y: int


class TestEncode:
    def test_plain_values(self) -> None:
        assert encode({"a": [1, 2]}) == '{"a":[1,2]}'
        assert encode("hi") == '"hi"'
        assert encode(0) == "0"
        assert encode(False) == "false"

    def test_model(self) -> None:
        assert encode(User(id=1, name="ada")) == '{"id":1,"name":"ada"}'

    def test_dataclass_and_datetime(self) -> None:
        assert encode(Point(1, 2)) == '{"x":1,"y":2}'
        assert encode(datetime(2026, 1, 2, tzinfo=UTC)) == '"2026-01-02T00:00:00Z"'

    def test_none_rejected(self) -> None:
        with pytest.raises(InvalidValueError):
            encode(None)

    def test_unserialisable_rejected(self) -> None:
        with pytest.raises(InvalidValueError):
            encode(object())


class TestDecode:
    def test_any_returns_json_types(self) -> None:
        assert decode('{"a":[1,2]}') == {"a": [1, 2]}
        assert decode('{"a":1}', Any) == {"a": 1}

    def test_typed_model(self) -> None:
        user = decode('{"id":1,"name":"ada"}', User)
        assert user == User(id=1, name="ada")

    def test_typed_dataclass(self) -> None:
        assert decode('{"x":1,"y":2}', Point) == Point(1, 2)

    def test_generic_container(self) -> None:
        assert decode('{"a":"1"}', dict[str, int]) == {"a": 1}

    def test_shape_mismatch_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            decode('"not a number"', int)

    def test_corrupt_json_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError):
            decode("{broken")


class TestCodecDependencies:
    def test_pydantic_core_is_a_declared_dependency(self) -> None:
        from importlib.metadata import requires

        reqs = requires("rowcache") or []
        names = (re.split(r"[<>=!~;\s\[]", req, maxsplit=1)[0] for req in reqs)
        declared = {name.lower().replace("_", "-") for name in names}
        assert "pydantic-core" in declared
