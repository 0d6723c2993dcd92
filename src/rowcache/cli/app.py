# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

from typing import Annotated

import typer

from rowcache.cli.commands import cache as cache_cmd
from rowcache.cli.commands import db

app = typer.Typer(
    name="rowcache",
    help="SQLite-backed cache with TTL expiry and namespaces",
    no_args_is_help=True,
)

app.add_typer(db.app, name="db", help="Database management")
app.add_typer(cache_cmd.app, name="cache", help="Read and write cache entries")


@app.callback()
def main(
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level")
    ] = "WARNING",
    log_format: Annotated[
        str, typer.Option("--log-format", help="Log output format: json or text")
    ] = "text",
) -> None:
    from rowcache.core.logging import setup_logging

    setup_logging(log_level, log_format)


@app.command()
def version() -> None:
    """Print the installed rowcache version."""
    from rowcache import __version__

    typer.echo(f"rowcache {__version__}")
