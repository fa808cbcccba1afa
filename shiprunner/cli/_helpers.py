"""Shared CLI helpers: state, project loading, and pipeline execution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from shiprunner.display import console

if TYPE_CHECKING:
    from shiprunner.pipeline.schema import Pipeline
    from shiprunner.project.loader import Project
    from shiprunner.project.metadata import PackageMetadata


@dataclass
class CliState:
    config: Path | None = None
    dry_run: bool = False
    verbose: bool = False


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        state = CliState()
        ctx.find_root().obj = state
    return state


def fail(message: str) -> typer.Exit:
    """Print an error line and return the exit to raise."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    return typer.Exit(1)


def load_project_or_exit(state: CliState) -> Project:
    from shiprunner.config import find_config_file
    from shiprunner.errors import ProjectLoadError
    from shiprunner.project.loader import load_project

    try:
        return load_project(find_config_file(state.config))
    except ProjectLoadError as e:
        raise fail(str(e)) from None


def load_metadata_or_exit(project: Project) -> PackageMetadata:
    from shiprunner.errors import MetadataError
    from shiprunner.project.metadata import load_package_metadata

    try:
        return load_package_metadata(project.path(project.spec.package_file))
    except MetadataError as e:
        raise fail(str(e)) from None


def execute_or_exit(pipeline: Pipeline, project: Project, state: CliState) -> None:
    """Run *pipeline* from the project root; exit non-zero on the first failure."""
    from shiprunner.display import display_plan, display_result
    from shiprunner.pipeline.executor import run_pipeline
    from shiprunner.pipeline.process import CommandRunner

    if state.dry_run:
        display_plan(pipeline)
        return

    result = run_pipeline(pipeline, CommandRunner(project.root))
    display_result(result)
    if not result.success:
        raise typer.Exit(result.exit_status)
