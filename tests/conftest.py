"""Shared test fixtures and helpers."""

from __future__ import annotations

import json
import sys
import textwrap
from pathlib import Path

import pytest

from shiprunner.pipeline.schema import Command, Pipeline, Stage
from shiprunner.project.loader import Project, load_project


def py(code: str, **kwargs) -> Command:
    """A Command running *code* with the current interpreter (no shell needed)."""
    return Command(program=sys.executable, args=("-c", code), **kwargs)


def make_stage(name: str, *commands: Command | str, title: str = "") -> Stage:
    return Stage(
        name=name,
        title=title,
        commands=[Command.parse(c) if isinstance(c, str) else c for c in commands],
    )


def make_pipeline(*stages: Stage, name: str = "test-pipeline") -> Pipeline:
    return Pipeline(name=name, stages=list(stages))


class RecordingRunner:
    """Fake runner: records every command, returns scripted exit codes.

    *exit_codes* maps a command's string form to its exit status (default 0);
    a value that is an exception instance is raised instead.
    """

    def __init__(self, exit_codes: dict[str, int | BaseException] | None = None) -> None:
        self.exit_codes = exit_codes or {}
        self.calls: list[str] = []

    def run(self, command: Command) -> int:
        key = str(command)
        self.calls.append(key)
        outcome = self.exit_codes.get(key, 0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


PACKAGE_JSON = {
    "name": "@fdaciuk/ajax",
    "version": "1.2.3",
    "description": "Ajax module in Vanilla JS",
    "homepage": "https://github.com/fdaciuk/ajax",
    "license": "MIT",
    "author": "Fernando Daciuk",
}


def write_project(root: Path, body: str = "", package: dict | None = None) -> Path:
    """Write ``shiprunner.yaml`` (+ ``package.json``) under *root*; return the config path."""
    (root / "package.json").write_text(json.dumps(package or PACKAGE_JSON))
    config = root / "shiprunner.yaml"
    header = textwrap.dedent("""\
        apiVersion: shiprunner/v1
        kind: Project
        metadata:
          name: ajax
        """)
    config.write_text(header + textwrap.dedent(body))
    return config


@pytest.fixture
def recording_runner():
    return RecordingRunner()


@pytest.fixture
def project(tmp_path) -> Project:
    """A project with default settings rooted at ``tmp_path``."""
    return load_project(write_project(tmp_path))
