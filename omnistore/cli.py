from __future__ import annotations

import sys
from pathlib import Path

import typer

from . import app as store_app
from .config import Settings
from .state.store import Store

app = typer.Typer(help="Command-driven key/value store")


def _settings(store_path: Path | None, atomic: bool | None, quiet: bool = False) -> Settings:
    overrides: dict[str, object] = {}
    if store_path is not None:
        overrides["store_path"] = store_path
    if atomic is not None:
        overrides["atomic_writes"] = atomic
    if quiet:
        overrides["echo_loads"] = False
    return Settings(**overrides)


@app.command()
def run(
    store_path: Path | None = typer.Option(None, help="Backing store file"),
    atomic: bool | None = typer.Option(
        None, "--atomic/--no-atomic", help="Replace the file atomically on save"
    ),
    quiet: bool = typer.Option(False, help="Do not print loaddata results"),
    verbose: bool = typer.Option(False, help="Print effective settings"),
) -> None:
    """Read command lines from stdin until EOF."""
    settings = _settings(store_path, atomic, quiet)
    if verbose:
        typer.echo(settings.model_dump_json(indent=2))
    store_app.run(sys.stdin, settings=settings, echo=typer.echo)


@app.command("exec")
def exec_(
    lines: list[str] = typer.Argument(..., help="Command lines, e.g. 'savedata k:v'"),
    store_path: Path | None = typer.Option(None, help="Backing store file"),
) -> None:
    """Apply the given command lines in order."""
    settings = _settings(store_path, None)
    store_app.run(lines, settings=settings, echo=typer.echo)


@app.command()
def dump(
    store_path: Path | None = typer.Option(None, help="Backing store file"),
) -> None:
    """Print the entries held in the store file."""
    settings = _settings(store_path, None)
    store = Store(settings.store_path)
    store.load()
    for key, value in sorted(store.snapshot().items()):
        typer.echo(f"{key}:{value}")


if __name__ == "__main__":  # pragma: no cover
    app()
