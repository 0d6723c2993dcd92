# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQL statements issued against the cache table.

Every statement filters on ``name = ?`` so one namespace can never read or
modify another namespace's rows.  Read statements additionally take the
current unix time and only match rows whose ``expiration`` is still in the
future.
"""

from __future__ import annotations

from rowcache.core.constants import TABLE_NAME

CREATE_TABLE = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    name TEXT NOT NULL,
    cachekey TEXT NOT NULL,
    cachevalue TEXT NOT NULL,
    expiration INTEGER NOT NULL,
    PRIMARY KEY (name, cachekey)
)
"""

CREATE_NAME_INDEX = (
    f"CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_name ON {TABLE_NAME} (name)"
)

# Params: (name, cachekey, now)
EXISTS = (
    f"SELECT COUNT(1) FROM {TABLE_NAME} "
    "WHERE name = ? AND cachekey = ? AND expiration > ?"
)

# Params: (name, cachekey, now)
GET = (
    f"SELECT cachekey, cachevalue, expiration FROM {TABLE_NAME} "
    "WHERE name = ? AND cachekey = ? AND expiration > ?"
)

# Params: (name, pattern, now)
GET_BY_PREFIX = (
    f"SELECT cachekey, cachevalue, expiration FROM {TABLE_NAME} "
    "WHERE name = ? AND cachekey GLOB ? AND expiration > ?"
)

# Params: (name, cachekey, cachevalue, expiration)
SET = (
    f"INSERT INTO {TABLE_NAME} (name, cachekey, cachevalue, expiration) "
    "VALUES (?, ?, ?, ?) "
    "ON CONFLICT (name, cachekey) DO UPDATE SET "
    "cachevalue = excluded.cachevalue, expiration = excluded.expiration"
)

# Params: (name, cachekey, cachevalue, expiration, now)
# Inserts, or takes over a row that has already expired, in one statement.
# A live row is left untouched and the statement reports zero changes.
TRY_SET = (
    f"INSERT INTO {TABLE_NAME} (name, cachekey, cachevalue, expiration) "
    "VALUES (?, ?, ?, ?) "
    "ON CONFLICT (name, cachekey) DO UPDATE SET "
    "cachevalue = excluded.cachevalue, expiration = excluded.expiration "
    f"WHERE {TABLE_NAME}.expiration <= ?"
)

# Params: (name, cachekey)
REMOVE = f"DELETE FROM {TABLE_NAME} WHERE name = ? AND cachekey = ?"

# Params: (name, pattern)
REMOVE_BY_PREFIX = f"DELETE FROM {TABLE_NAME} WHERE name = ? AND cachekey GLOB ?"

# Params: (name, now)
COUNT_ALL = f"SELECT COUNT(1) FROM {TABLE_NAME} WHERE name = ? AND expiration > ?"

# Params: (name, pattern, now)
COUNT_BY_PREFIX = (
    f"SELECT COUNT(1) FROM {TABLE_NAME} "
    "WHERE name = ? AND cachekey GLOB ? AND expiration > ?"
)

# Params: (name,)
FLUSH = f"DELETE FROM {TABLE_NAME} WHERE name = ?"


def get_many(count: int) -> str:
    """Return the batch lookup statement for *count* exact keys.

    Params: ``(name, key_1, ..., key_count, now)``
    """
    placeholders = ", ".join("?" for _ in range(count))
    return (
        f"SELECT cachekey, cachevalue, expiration FROM {TABLE_NAME} "  # noqa: S608
        f"WHERE name = ? AND cachekey IN ({placeholders}) AND expiration > ?"
    )
