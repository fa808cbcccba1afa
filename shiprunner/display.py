"""Rich console output helpers for pipeline runs."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from shiprunner.pipeline.executor import PipelineResult
from shiprunner.pipeline.schema import Pipeline

console = Console()


def display_plan(pipeline: Pipeline) -> None:
    """Render the stages and commands of *pipeline* without running them."""
    table = Table(title=f"Pipeline: {pipeline.name}")
    table.add_column("#", justify="right")
    table.add_column("Stage", style="cyan")
    table.add_column("Commands")

    for index, stage in enumerate(pipeline.stages, 1):
        lines = []
        for command in stage.commands:
            line = escape(str(command))
            if command.cwd:
                line += f" [dim](in {escape(command.cwd)})[/dim]"
            if not command.check:
                line += " [yellow](non-critical)[/yellow]"
            lines.append(line)
        table.add_row(str(index), stage.name, "\n".join(lines) or "[dim](none)[/dim]")

    console.print(table)


def display_result(result: PipelineResult) -> None:
    """Summarize a finished run: a one-line success or a red failure panel."""
    if result.success:
        console.print(f"[green]Done![/green] [dim]({result.duration_ms}ms)[/dim]")
        return

    failure = result.failure
    assert failure is not None
    body = (
        f"[bold]Stage:[/bold] {escape(failure.stage_name)} "
        f"({failure.stage_index + 1}/{failure.stage_count})\n"
        f"[bold]Command #{failure.cause.command_index}:[/bold] {escape(str(failure.command))}\n"
        f"[red]{escape(str(failure.cause.cause))}[/red]"
    )
    console.print(
        Panel(body, title=f"{escape(result.pipeline_name)} failed", border_style="red")
    )
