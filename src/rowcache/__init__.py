# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""rowcache - a SQLite-backed cache provider with TTL expiry and namespaces."""

__version__ = "0.1.0"
