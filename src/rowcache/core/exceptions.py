# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for rowcache."""


class RowCacheError(Exception):
    """Base exception for all rowcache errors."""


class ConfigurationError(RowCacheError):
    """Invalid or missing configuration."""


class InvalidArgumentError(RowCacheError, ValueError):
    """A caller-supplied argument was rejected before touching the store."""


class InvalidKeyError(InvalidArgumentError):
    """Cache key is missing, empty, or whitespace only."""


class InvalidPrefixError(InvalidArgumentError):
    """Key prefix is missing, empty, or whitespace only."""


class InvalidExpirationError(InvalidArgumentError):
    """Expiration is zero or negative."""


class InvalidValueError(InvalidArgumentError):
    """Cache value is ``None`` or a batch is empty."""


class DecodeError(RowCacheError):
    """A stored value could not be converted to the requested type."""


class StorageError(RowCacheError):
    """Database or storage operation failed."""
