"""Pipeline module: ordered stages of external commands, run fail-fast."""

from shiprunner.pipeline.executor import PipelineResult, StageResult, execute_stage, run_pipeline
from shiprunner.pipeline.process import CommandRunner, DryRunRunner
from shiprunner.pipeline.schema import Command, Pipeline, Stage

__all__ = [
    "Command",
    "CommandRunner",
    "DryRunRunner",
    "Pipeline",
    "PipelineResult",
    "Stage",
    "StageResult",
    "execute_stage",
    "run_pipeline",
]
