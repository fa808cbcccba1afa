"""Pydantic models for ``shiprunner.yaml`` project definitions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from shiprunner.pipeline.schema import Command


class BundleConfig(BaseModel):
    output: str = "dist/bundle.min.js"
    # Reads the concatenated sources on stdin, writes the result to stdout.
    minifier: Command | None = None


class ReadmeConfig(BaseModel):
    path: str = "README.md"
    # Only lines containing this substring are rewritten; None means any line.
    marker: str | None = None


class TasksConfig(BaseModel):
    lint: list[Command] = [Command.parse("npm run lint")]
    test: list[Command] = [Command.parse("npm test")]
    report: list[Command] = []

    def commands_for(self, name: str) -> list[Command]:
        if name not in type(self).model_fields:
            raise KeyError(name)
        return list(getattr(self, name))


class WatchConfig(BaseModel):
    patterns: list[str] = Field(
        default=["src/**/*.js", "test/**/*.js"],
        min_length=1,
    )
    stages: list[Literal["lint", "test", "report"]] = Field(
        default=["test", "lint"],
        min_length=1,
    )
    debounce_seconds: float = Field(default=0.5, ge=0)
    run_on_start: bool = True

    @model_validator(mode="after")
    def _unique_stages(self) -> WatchConfig:
        if len(set(self.stages)) != len(self.stages):
            raise ValueError("watch.stages must not repeat a stage")
        return self


class ReportsConfig(BaseModel):
    # Repository receiving the generated reports; None skips publishing.
    repository: str | None = None
    branch: str = "gh-pages"
    directories: list[str] = Field(default=["coverage", "plato"], min_length=1)
    workdir: str = ".tmp"


class ReleaseConfig(BaseModel):
    remote: str = "origin"
    development_branch: str = "dev"
    main_branch: str = "master"
    commit_message: str = "Release v{version}"
    reports: ReportsConfig = ReportsConfig()
    publish: list[Command] = [Command.parse("npm run pub")]

    @model_validator(mode="after")
    def _distinct_branches(self) -> ReleaseConfig:
        if self.development_branch == self.main_branch:
            raise ValueError("release.development_branch and release.main_branch must differ")
        return self


class ProjectMetadata(BaseModel):
    name: str
    description: str = ""


class ProjectSpec(BaseModel):
    package_file: str = "package.json"
    sources: list[str] = Field(default=["src/index.js"], min_length=1)
    bundle: BundleConfig = BundleConfig()
    readme: ReadmeConfig = ReadmeConfig()
    tasks: TasksConfig = TasksConfig()
    watch: WatchConfig = WatchConfig()
    release: ReleaseConfig = ReleaseConfig()


class ProjectDefinition(BaseModel):
    apiVersion: Literal["shiprunner/v1"] = "shiprunner/v1"
    kind: Literal["Project"] = "Project"
    metadata: ProjectMetadata
    spec: ProjectSpec = ProjectSpec()
