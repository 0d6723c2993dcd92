# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging with cache-key truncation."""

import json
import logging
import sys
from typing import Any

from rowcache.core.constants import MAX_LOGGED_KEY_LENGTH


def shorten_key(key: str, limit: int = MAX_LOGGED_KEY_LENGTH) -> str:
    """Clip *key* so that oversized keys do not flood the log."""
    if len(key) <= limit:
        return key
    return f"{key[:limit]}...({len(key)} chars)"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        namespace = getattr(record, "cache_namespace", None)
        if namespace is not None:
            log_entry["namespace"] = namespace
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        namespace = getattr(record, "cache_namespace", None)
        return f"{msg} [ns={namespace}]" if namespace is not None else msg


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger("rowcache")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            TextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)
