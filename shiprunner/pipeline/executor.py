"""Sequential, fail-fast execution engine for stages and pipelines."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from shiprunner.errors import CommandFailure, PipelineFailure, SpawnError, StageFailure
from shiprunner.pipeline.process import CommandRunner, Runner
from shiprunner.pipeline.schema import Pipeline, Stage

logger = logging.getLogger(__name__)

StageStartCallback = Callable[[int, Stage], None]


@dataclass
class StageResult:
    name: str
    commands_run: int = 0
    failure: StageFailure | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.failure is None


@dataclass
class PipelineResult:
    pipeline_name: str
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    stage_results: list[StageResult] = field(default_factory=list)
    failure: PipelineFailure | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def exit_status(self) -> int:
        return 0 if self.success else 1


def execute_stage(stage: Stage, runner: Runner) -> StageResult:
    """Run a stage's commands in order, stopping at the first failure.

    Commands with ``check=False`` may exit non-zero without failing the stage.
    Side effects of commands that already ran are left in place.
    """
    start = time.monotonic()
    result = StageResult(name=stage.name)

    for index, command in enumerate(stage.commands):
        try:
            returncode = runner.run(command)
        except SpawnError as e:
            result.failure = StageFailure(stage.name, index, e)
            break
        result.commands_run += 1
        if returncode == 0:
            continue
        if not command.check:
            logger.warning(
                "Ignoring exit status %d of `%s` in stage '%s'", returncode, command, stage.name
            )
            continue
        result.failure = StageFailure(stage.name, index, CommandFailure(command, returncode))
        break

    result.duration_ms = int((time.monotonic() - start) * 1000)
    return result


def _announce_stage(index: int, stage: Stage) -> None:
    from shiprunner.display import console

    console.print(f"[bold]- {stage.label}[/bold]", highlight=False)


def run_pipeline(
    pipeline: Pipeline,
    runner: Runner | None = None,
    *,
    on_stage_start: StageStartCallback | None = None,
) -> PipelineResult:
    """Execute *pipeline*'s stages strictly in order.

    The first failing stage aborts the run: no later stage executes and the
    returned result carries a :class:`PipelineFailure`.
    """
    runner = runner or CommandRunner()
    announce = on_stage_start or _announce_stage
    result = PipelineResult(pipeline_name=pipeline.name)
    total = len(pipeline.stages)
    start = time.monotonic()

    for index, stage in enumerate(pipeline.stages):
        logger.info("[%s %d/%d] %s", pipeline.name, index + 1, total, stage.label)
        announce(index, stage)

        stage_result = execute_stage(stage, runner)
        result.stage_results.append(stage_result)
        if stage_result.failure is not None:
            result.failure = PipelineFailure(pipeline.name, index, total, stage_result.failure)
            logger.error("%s", result.failure)
            break

    result.duration_ms = int((time.monotonic() - start) * 1000)
    return result
