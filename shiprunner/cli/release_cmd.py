"""Long-running and multi-stage commands: release, watch, run-all."""

from __future__ import annotations

import typer

from shiprunner.cli._helpers import (
    execute_or_exit,
    get_state,
    load_metadata_or_exit,
    load_project_or_exit,
)


def release(ctx: typer.Context) -> None:
    """Bundle, tag, publish reports, merge, push and publish to the registry."""
    from shiprunner.release import build_release_pipeline

    state = get_state(ctx)
    project = load_project_or_exit(state)
    meta = load_metadata_or_exit(project)
    pipeline = build_release_pipeline(project, meta, verbose=state.verbose)
    execute_or_exit(pipeline, project, state)


def watch(ctx: typer.Context) -> None:
    """Rerun the checks whenever watched files change (Ctrl-C to stop)."""
    from shiprunner.pipeline.process import DryRunRunner
    from shiprunner.runner.watch import WatchRunner

    state = get_state(ctx)
    project = load_project_or_exit(state)
    runner = DryRunRunner() if state.dry_run else None
    watcher = WatchRunner.for_project(project, runner=runner)
    watcher.run(run_on_start=project.spec.watch.run_on_start)


def run_all(ctx: typer.Context) -> None:
    """Default task: same as ``watch``."""
    watch(ctx)
