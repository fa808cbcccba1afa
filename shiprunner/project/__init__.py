"""Project configuration: ``shiprunner.yaml`` plus ``package.json`` metadata."""

from shiprunner.project.loader import Project, load_project, load_project_definition
from shiprunner.project.metadata import PackageMetadata, load_package_metadata
from shiprunner.project.schema import ProjectDefinition, ProjectSpec

__all__ = [
    "PackageMetadata",
    "Project",
    "ProjectDefinition",
    "ProjectSpec",
    "load_package_metadata",
    "load_project",
    "load_project_definition",
]
