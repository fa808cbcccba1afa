"""Command runners: spawn one child process per command."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from shiprunner.errors import CommandFailure, SpawnError
from shiprunner.pipeline.schema import Command

logger = logging.getLogger(__name__)


class Runner(Protocol):
    def run(self, command: Command) -> int: ...


class CommandRunner:
    """Runs commands with the controlling terminal's stdio attached.

    A non-zero exit code is returned, not raised: whether it counts as a
    failure is decided by the caller.
    """

    def __init__(self, base_dir: Path | None = None, env: dict[str, str] | None = None) -> None:
        self._base_dir = base_dir
        self._env = env

    def resolve_cwd(self, command: Command) -> Path | None:
        if command.cwd is None:
            return self._base_dir
        cwd = Path(command.cwd)
        if not cwd.is_absolute() and self._base_dir is not None:
            cwd = self._base_dir / cwd
        return cwd

    def run(self, command: Command) -> int:
        cwd = self.resolve_cwd(command)
        logger.debug("spawn: %s (cwd=%s)", command, cwd or ".")
        try:
            completed = subprocess.run(command.argv, cwd=cwd, env=self._env, check=False)
        except OSError as e:
            raise SpawnError(command, e) from e
        logger.debug("exit %d: %s", completed.returncode, command)
        return completed.returncode


class DryRunRunner:
    """Prints each command instead of running it, and reports success."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self.commands: list[Command] = []

    def run(self, command: Command) -> int:
        self.commands.append(command)
        where = f" [dim](in {escape(command.cwd)})[/dim]" if command.cwd else ""
        self._console.print(f"  [cyan]$[/cyan] {escape(str(command))}{where}", highlight=False)
        return 0


def capture_output(command: Command, stdin: str, base_dir: Path | None = None) -> str:
    """Run *command* feeding *stdin* and return its decoded stdout.

    Used for filter-style collaborators (e.g. a minifier). Raises
    :class:`SpawnError` if it cannot start and
    :class:`~shiprunner.errors.CommandFailure` on a non-zero exit.
    """
    cwd = CommandRunner(base_dir).resolve_cwd(command)
    try:
        result = subprocess.run(
            command.argv,
            input=stdin.encode("utf-8"),
            stdout=subprocess.PIPE,
            cwd=cwd,
            check=False,
        )
    except OSError as e:
        raise SpawnError(command, e) from e
    if result.returncode != 0:
        raise CommandFailure(command, result.returncode)
    return result.stdout.decode("utf-8", errors="replace")
