"""Command-line tools for compiled resource graphs.

Usage:
    resgraph hash "nginx config" "base packages"
    resgraph dot catalog.json | dot -Tsvg > catalog.svg
    resgraph --log-level DEBUG dot < catalog.json
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer
from pydantic import ValidationError

from resgraph import __version__
from resgraph.config import CompilerSettings
from resgraph.export import catalog_from_json, render_dot

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Inspect resource graphs compiled from configuration declarations.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print the package version and exit."""
    if value:
        typer.echo(f"resgraph {__version__}")
        raise typer.Exit()


def _die(err: Exception | str) -> NoReturn:
    typer.echo(f"resgraph: {err}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: RESGRAPH_LOG_LEVEL or WARNING)",
    ),
) -> None:
    """Configure logging for every subcommand."""
    overrides = {} if log_level is None else {"log_level": log_level}
    try:
        settings = CompilerSettings(**overrides)
    except ValidationError as e:
        _die(e.errors(include_url=False)[0]["msg"])
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command(name="hash")
def hash_command(
    labels: list[str] = typer.Argument(..., help="Resource labels to hash"),  # noqa: B008
) -> None:
    """Print the identifier derived from each label."""
    try:
        hasher = CompilerSettings().build_hasher()
    except ValueError as e:
        _die(e)
    for label in labels:
        typer.echo(f"{hasher.hash_label(label)}\t{label}")


@app.command(name="dot")
def dot_command(
    catalog: Path | None = typer.Argument(  # noqa: B008
        None,
        help="JSON catalog to render (default: standard input)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Render a JSON catalog as a Graphviz digraph."""
    if catalog is None:
        data = sys.stdin.buffer.read()
    else:
        data = catalog.read_bytes()
    try:
        nodes = catalog_from_json(data)
    except (ValidationError, UnicodeDecodeError) as e:
        _die(f"read catalog: {e}")
    logger.info("rendering %d resources", len(nodes))
    typer.echo(render_dot(nodes), nl=False)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
