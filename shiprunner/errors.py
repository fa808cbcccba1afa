"""Exception hierarchy shared across shiprunner.

Failures wrap exactly once per layer (command -> stage -> pipeline) so the
outermost message names the full context. Each wrapper also sets
``__cause__``, even when it is built as a value and never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shiprunner.pipeline.schema import Command


class ShiprunnerError(Exception):
    """Base class for all errors raised by shiprunner."""


class SpawnError(ShiprunnerError):
    """Raised when a command's process cannot be started at all."""

    def __init__(self, command: Command, cause: OSError) -> None:
        self.command = command
        self.cause = cause
        self.__cause__ = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Cannot start `{command}`: {reason}")


class CommandFailure(ShiprunnerError):
    """A command started but exited with a non-zero status."""

    def __init__(self, command: Command, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"`{command}` exited with status {returncode}")


class StageFailure(ShiprunnerError):
    """The first command failure inside a stage."""

    def __init__(
        self,
        stage_name: str,
        command_index: int,
        cause: CommandFailure | SpawnError,
    ) -> None:
        self.stage_name = stage_name
        self.command_index = command_index
        self.cause = cause
        self.__cause__ = cause
        super().__init__(f"Stage '{stage_name}' failed at command #{command_index}: {cause}")


class PipelineFailure(ShiprunnerError):
    """The first stage failure inside a pipeline."""

    def __init__(
        self,
        pipeline_name: str,
        stage_index: int,
        stage_count: int,
        cause: StageFailure,
    ) -> None:
        self.pipeline_name = pipeline_name
        self.stage_index = stage_index
        self.stage_count = stage_count
        self.cause = cause
        self.__cause__ = cause
        super().__init__(
            f"Pipeline '{pipeline_name}' aborted at stage {stage_index + 1}/{stage_count}: {cause}"
        )

    @property
    def stage_name(self) -> str:
        return self.cause.stage_name

    @property
    def command(self) -> Command:
        return self.cause.cause.command


class ProjectLoadError(ShiprunnerError):
    """Raised when a project file cannot be loaded or validated."""


class MetadataError(ShiprunnerError):
    """Raised when package metadata (package.json) is missing or malformed."""


class BundleError(ShiprunnerError):
    """Raised when the distributable bundle cannot be produced."""
