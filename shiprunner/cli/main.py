"""Typer CLI for shiprunner: wiring hub for command modules."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from shiprunner.cli._helpers import CliState, console

app = typer.Typer(
    name="shiprunner",
    help="Build, check and release a JavaScript library.",
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    if value:
        from shiprunner import __version__

        console.print(f"shiprunner {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Project file (default: $SHIPRUNNER_CONFIG, then ./shiprunner.yaml)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would run without executing anything"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """shiprunner: build, check and release a JavaScript library."""
    from shiprunner._log import setup_logging

    setup_logging(verbose=verbose)
    ctx.obj = CliState(config=config, dry_run=dry_run, verbose=verbose)

    if ctx.invoked_subcommand is None:
        run_all(ctx)


# ---------------------------------------------------------------------------
# Command registrations: plain functions from *_cmd modules
# ---------------------------------------------------------------------------

from shiprunner.cli.release_cmd import release, run_all, watch  # noqa: E402
from shiprunner.cli.tasks_cmd import (  # noqa: E402
    bundle,
    lint,
    report,
    test,
    update_version_references,
)

app.command()(lint)
app.command()(bundle)
app.command()(test)
app.command()(watch)
app.command()(report)
app.command("update-version-references")(update_version_references)
app.command()(release)
app.command("run-all")(run_all)


def app_entry() -> None:
    """Entry point for the CLI."""
    app(prog_name="shiprunner")
