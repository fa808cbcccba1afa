"""Load and validate project definitions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from shiprunner.errors import ProjectLoadError
from shiprunner.project.schema import ProjectDefinition, ProjectMetadata, ProjectSpec


@dataclass(frozen=True)
class Project:
    """A validated definition plus the directory its relative paths resolve against."""

    definition: ProjectDefinition
    root: Path
    config_file: Path | None = None

    @property
    def spec(self) -> ProjectSpec:
        return self.definition.spec

    @property
    def name(self) -> str:
        return self.definition.metadata.name

    def path(self, relative: str) -> Path:
        p = Path(relative)
        return p if p.is_absolute() else self.root / p


def load_project_definition(path: Path) -> ProjectDefinition:
    """Read a YAML file and validate it as a ProjectDefinition."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectLoadError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ProjectLoadError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ProjectLoadError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return ProjectDefinition.model_validate(data)
    except ValidationError as e:
        raise ProjectLoadError(f"Validation failed for {path}:\n{e}") from e


def load_project(config_file: Path | None, cwd: Path | None = None) -> Project:
    """Load *config_file*, or fall back to defaults rooted at *cwd*."""
    if config_file is None:
        root = (cwd or Path.cwd()).resolve()
        definition = ProjectDefinition(metadata=ProjectMetadata(name=root.name or "project"))
        return Project(definition=definition, root=root)

    config_file = config_file.resolve()
    definition = load_project_definition(config_file)
    return Project(definition=definition, root=config_file.parent, config_file=config_file)
