# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Key and prefix validation, and prefix to GLOB-pattern translation."""

from __future__ import annotations

from collections.abc import Iterable

from rowcache.core.constants import GLOB_METACHARACTERS, WILDCARD
from rowcache.core.exceptions import InvalidKeyError, InvalidPrefixError, InvalidValueError


def _is_blank(text: object) -> bool:
    return not isinstance(text, str) or not text.strip()


def check_key(key: object) -> str:
    """Return *key* unchanged, or raise :class:`InvalidKeyError`."""
    if _is_blank(key):
        raise InvalidKeyError(f"cache key must be a non-blank string, got {key!r}")
    return key  # type: ignore[return-value]


def check_prefix(prefix: object) -> str:
    """Return *prefix* unchanged, or raise :class:`InvalidPrefixError`."""
    if _is_blank(prefix):
        raise InvalidPrefixError(f"key prefix must be a non-blank string, got {prefix!r}")
    return prefix  # type: ignore[return-value]


def check_keys(keys: Iterable[str]) -> list[str]:
    """Validate a batch of keys, dropping duplicates but keeping order."""
    if keys is None or isinstance(keys, str):
        raise InvalidValueError("keys must be an iterable of strings")
    unique = list(dict.fromkeys(check_key(k) for k in keys))
    if not unique:
        raise InvalidValueError("keys must not be empty")
    return unique


def prefix_pattern(prefix: str) -> str:
    """Translate *prefix* into a ``GLOB`` pattern matching keys that start with it.

    ``*``, ``?`` and ``[`` inside the prefix match literally.
    """
    check_prefix(prefix)
    escaped = "".join(f"[{ch}]" if ch in GLOB_METACHARACTERS else ch for ch in prefix)
    return f"{escaped}{WILDCARD}"
