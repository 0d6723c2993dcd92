# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache entry CLI commands.

Values are passed and printed as JSON.  Every command works on the
namespace configured by ``ROWCACHE_NAMESPACE`` unless ``--namespace`` is
given.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer

from rowcache.cache.provider import SQLiteCachingProvider
from rowcache.core.exceptions import RowCacheError

app = typer.Typer()

NamespaceOption = Annotated[
    str, typer.Option("--namespace", "-n", help="Cache namespace (default from settings)")
]


@contextmanager
def _provider(namespace: str) -> Iterator[SQLiteCachingProvider]:
    from rowcache.cache.manager import create_provider

    try:
        provider = create_provider(name=namespace or None)
    except RowCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    try:
        yield provider
    except RowCacheError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    finally:
        provider.close()


@app.command()
def get(
    key: Annotated[str, typer.Argument(help="Cache key")],
    namespace: NamespaceOption = "",
) -> None:
    """Print the JSON value stored under KEY."""
    with _provider(namespace) as provider:
        result = provider.get(key)
    if not result.has_value:
        typer.echo(f"Key not found: {key}", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(result.value))


@app.command("set")
def set_(
    key: Annotated[str, typer.Argument(help="Cache key")],
    value: Annotated[str, typer.Argument(help="Value as JSON")],
    ttl: Annotated[int, typer.Option("--ttl", "-t", help="Time to live in seconds")] = 3600,
    only_if_absent: Annotated[
        bool, typer.Option("--if-absent", help="Only write if no live entry exists")
    ] = False,
    namespace: NamespaceOption = "",
) -> None:
    """Store a JSON VALUE under KEY."""
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as exc:
        typer.echo(f"Error: value is not valid JSON: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    with _provider(namespace) as provider:
        if only_if_absent:
            if not provider.try_set(key, decoded, ttl):
                typer.echo(f"Key already present: {key}")
                raise typer.Exit(code=1)
        else:
            provider.set(key, decoded, ttl)
    typer.echo(f"Stored {key} (ttl={ttl}s)")


@app.command()
def remove(
    key: Annotated[str, typer.Argument(help="Cache key")],
    namespace: NamespaceOption = "",
) -> None:
    """Delete KEY."""
    with _provider(namespace) as provider:
        provider.remove(key)
    typer.echo(f"Removed {key}")


@app.command("remove-prefix")
def remove_prefix(
    prefix: Annotated[str, typer.Argument(help="Key prefix")],
    namespace: NamespaceOption = "",
) -> None:
    """Delete every key starting with PREFIX."""
    with _provider(namespace) as provider:
        before = provider.get_count(prefix)
        provider.remove_by_prefix(prefix)
    typer.echo(f"Removed {before} entries matching {prefix!r}")


@app.command()
def keys(
    prefix: Annotated[str, typer.Argument(help="Key prefix")],
    namespace: NamespaceOption = "",
) -> None:
    """List live entries whose key starts with PREFIX."""
    from rich.console import Console
    from rich.table import Table

    with _provider(namespace) as provider:
        entries = provider.get_by_prefix(prefix)

    console = Console()
    if not entries:
        console.print(f"No entries match {prefix!r}.")
        return

    table = Table(title=f"Entries matching {prefix!r}")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key in sorted(entries):
        table.add_row(key, json.dumps(entries[key].value))
    console.print(table)


@app.command()
def count(
    prefix: Annotated[
        str, typer.Option("--prefix", "-p", help="Only count keys with this prefix")
    ] = "",
    namespace: NamespaceOption = "",
) -> None:
    """Print the number of live entries."""
    with _provider(namespace) as provider:
        total = provider.get_count(prefix)
    typer.echo(str(total))


@app.command()
def flush(
    namespace: NamespaceOption = "",
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Delete every entry in the namespace."""
    if not yes:
        typer.confirm("Delete every entry in the namespace?", abort=True)
    with _provider(namespace) as provider:
        provider.flush()
        name = provider.name
    typer.echo(f"Flushed namespace {name!r}")
