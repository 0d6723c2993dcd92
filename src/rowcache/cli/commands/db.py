# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Database management commands."""

from __future__ import annotations

import typer

from rowcache.core.exceptions import RowCacheError

app = typer.Typer()


@app.command()
def init() -> None:
    """Create the cache table in the configured SQLite database."""
    from rowcache.core.config import get_settings
    from rowcache.storage.database import open_connection

    settings = get_settings()
    typer.echo(f"Initializing database at {settings.db_path}...")
    try:
        conn = open_connection(
            settings.db_path,
            timeout=settings.busy_timeout,
            journal_mode=settings.journal_mode,
        )
    except RowCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    conn.close()
    typer.echo("Database initialized.")
