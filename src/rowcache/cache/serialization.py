# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""JSON codec for cached values, built on pydantic.

Values are encoded with :func:`pydantic_core.to_json`, which understands
pydantic models, dataclasses, datetimes and the usual containers.  On the
way back the caller names the type it expects and a cached
:class:`~pydantic.TypeAdapter` validates the stored JSON into it.
"""

from __future__ import annotations

import functools
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from rowcache.core.exceptions import DecodeError, InvalidValueError


@functools.lru_cache(maxsize=256)
def _adapter(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(value_type)


def encode(value: Any) -> str:
    """Serialise *value* to a JSON string.

    Raises:
        InvalidValueError: If *value* is ``None`` or cannot be serialised.
    """
    if value is None:
        raise InvalidValueError("cache value must not be None")
    try:
        return to_json(value).decode("utf-8")
    except PydanticSerializationError as exc:
        msg = f"cache value of type {type(value).__name__} is not serialisable: {exc}"
        raise InvalidValueError(msg) from exc


def decode(text: str, value_type: Any = Any) -> Any:
    """Deserialise *text* into *value_type*.

    Raises:
        DecodeError: If the stored JSON does not fit *value_type*.
    """
    try:
        adapter = _adapter(value_type)
    except TypeError:
        adapter = TypeAdapter(value_type)
    try:
        return adapter.validate_json(text)
    except ValidationError as exc:
        raise DecodeError(f"stored value cannot be read as {value_type!r}: {exc}") from exc
