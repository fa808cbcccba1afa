"""Single-task commands: lint, test, report, bundle, update-version-references."""

from __future__ import annotations

import typer
from rich.markup import escape

from shiprunner.cli._helpers import (
    console,
    execute_or_exit,
    fail,
    get_state,
    load_metadata_or_exit,
    load_project_or_exit,
)


def _run_task(ctx: typer.Context, name: str) -> None:
    from shiprunner.release import task_pipeline

    state = get_state(ctx)
    project = load_project_or_exit(state)
    execute_or_exit(task_pipeline(project, name), project, state)


def lint(ctx: typer.Context) -> None:
    """Run the linter."""
    _run_task(ctx, "lint")


def test(ctx: typer.Context) -> None:
    """Run the test suite once."""
    _run_task(ctx, "test")


def report(ctx: typer.Context) -> None:
    """Generate static-analysis and coverage reports."""
    _run_task(ctx, "report")


def bundle(ctx: typer.Context) -> None:
    """Concatenate, minify and stamp the distributable bundle."""
    from shiprunner.bundle import build_bundle
    from shiprunner.errors import BundleError

    state = get_state(ctx)
    project = load_project_or_exit(state)
    meta = load_metadata_or_exit(project)
    spec = project.spec
    output = project.path(spec.bundle.output)

    if state.dry_run:
        console.print(
            f"Would bundle {len(spec.sources)} source(s) into {escape(str(output))} ({meta.tag})"
        )
        return

    try:
        build_bundle(
            [project.path(s) for s in spec.sources],
            output,
            meta,
            minifier=spec.bundle.minifier,
            base_dir=project.root,
        )
    except BundleError as e:
        raise fail(str(e)) from None
    console.print(f"[green]Bundled[/green] {escape(str(output))} ({meta.tag})", highlight=False)


def update_version_references(ctx: typer.Context) -> None:
    """Point versioned URLs in the README at the current package version."""
    from shiprunner.versioning import update_readme

    state = get_state(ctx)
    project = load_project_or_exit(state)
    meta = load_metadata_or_exit(project)
    readme = project.spec.readme
    path = project.path(readme.path)

    if state.dry_run:
        console.print(f"Would update version references in {escape(str(path))} to {meta.tag}")
        return

    try:
        changed = update_readme(path, meta.version, readme.marker)
    except (OSError, UnicodeDecodeError) as e:
        raise fail(f"Cannot update {path}: {e}") from None

    if changed:
        console.print(f"[green]Updated[/green] {escape(str(path))} to {meta.tag}", highlight=False)
    else:
        console.print(f"{escape(str(path))} already up to date", highlight=False)
