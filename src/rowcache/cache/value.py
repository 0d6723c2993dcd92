# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Result wrapper returned by every cache read."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheValue(Generic[T]):
    """A cached value together with whether it was found.

    ``has_value`` is ``False`` for misses; ``value`` is then ``None``.
    """

    value: T | None
    has_value: bool

    @property
    def is_null(self) -> bool:
        return self.value is None

    @classmethod
    def no_value(cls) -> CacheValue[Any]:
        return _NO_VALUE

    def __repr__(self) -> str:
        if not self.has_value:
            return "CacheValue(<no value>)"
        return f"CacheValue({self.value!r})"


_NO_VALUE: CacheValue[Any] = CacheValue(value=None, has_value=False)
