# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations and fixed values shared across the package."""

from enum import StrEnum


class ProviderType(StrEnum):
    SQLITE = "sqlite"


DEFAULT_PROVIDER_NAME = "DefaultSQLite"

TABLE_NAME = "rowcache_entries"

# GLOB wildcard appended to prefixes; prefix matching is case sensitive.
WILDCARD = "*"

# GLOB metacharacters in a caller's prefix are wrapped in brackets so that
# they match literally.
GLOB_METACHARACTERS = frozenset("*?[")

# Longest key echoed into a log line before it is truncated.
MAX_LOGGED_KEY_LENGTH = 128
