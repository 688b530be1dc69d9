"""bundlediag CLI: replay recorded build failures as enriched diagnostics."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from bundlediag import __version__
from bundlediag.classifier.dispatch import ErrorProcessor
from bundlediag.formatting.emphasis import Style
from bundlediag.graph.trace import format_import_trace, get_module_trace
from bundlediag.models.diagnostic import SimpleDiagnostic
from bundlediag.settings import Settings
from bundlediag.snapshot.loader import SnapshotSafetyError
from bundlediag.snapshot.replay import InvalidSnapshotError, Replay, load_replay

logger = logging.getLogger("bundlediag.cli")


def _load(snapshot: str, settings: Settings) -> Replay:
    try:
        return load_replay(Path(snapshot), settings)
    except (SnapshotSafetyError, InvalidSnapshotError) as exc:
        click.echo(f"Invalid snapshot: {exc}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(version=__version__, prog_name="bundlediag")
def cli() -> None:
    """bundlediag - readable diagnostics for bundler build failures."""


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.option("--color/--no-color", default=None, help="Force ANSI styling on or off.")
def replay(snapshot: str, color: bool | None) -> None:
    """Classify every error of a recorded build and print the result.

    Exits with code 1 when the build recorded any error.
    """
    settings = Settings()
    if color is not None:
        settings = settings.model_copy(update={"color": color})
    logging.basicConfig(level=settings.log_level.upper())

    recorded = _load(snapshot, settings)
    logger.info("Replaying %d build error(s) from %s", len(recorded.errors), snapshot)
    results = asyncio.run(ErrorProcessor(recorded.context).process(recorded.errors))

    for result in results:
        if isinstance(result, SimpleDiagnostic):
            click.echo(str(result))
        else:
            click.echo(f"{result.name}: {result.error.message}")
        click.echo()

    if not results:
        click.echo(recorded.context.emph.emphasize("No build errors recorded.", Style.SUCCESS))
        return
    sys.exit(1)


@cli.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.argument("module_id")
def trace(snapshot: str, module_id: str) -> None:
    """Print the import trace that led to MODULE_ID."""
    settings = Settings()
    recorded = _load(snapshot, settings)
    module = recorded.modules.get(module_id)
    if module is None:
        click.echo(f"Unknown module: {module_id}", err=True)
        sys.exit(2)

    context = recorded.context
    text = format_import_trace(
        get_module_trace(module, context.graph.get_issuer),
        context.shortener,
        context.internal_loader_re,
    )
    click.echo(text.strip() or f"{module_id} is an entry module")
