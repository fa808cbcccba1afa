"""Package metadata read from the library's ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from shiprunner.errors import MetadataError


class PackageMetadata(BaseModel):
    """The subset of ``package.json`` used for banners, tags and commits."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    version: str
    description: str = ""
    homepage: str = ""
    license: str = ""
    author: str = ""

    @field_validator("author", mode="before")
    @classmethod
    def _author_to_str(cls, value: object) -> object:
        # npm allows {"name": ..., "email": ..., "url": ...}
        if isinstance(value, dict):
            name = value.get("name", "")
            email = value.get("email")
            return f"{name} <{email}>" if email else name
        return value

    @field_validator("version")
    @classmethod
    def _strip_v(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("version must not be empty")
        return value.removeprefix("v")

    @property
    def display_name(self) -> str:
        """Name without an npm scope: ``@scope/lib`` -> ``lib``."""
        if self.name.startswith("@") and "/" in self.name:
            return self.name.split("/", 1)[1]
        return self.name

    @property
    def tag(self) -> str:
        return f"v{self.version}"


def load_package_metadata(path: Path) -> PackageMetadata:
    """Read *path* (a ``package.json``) into :class:`PackageMetadata`."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MetadataError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MetadataError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise MetadataError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    try:
        return PackageMetadata.model_validate(data)
    except ValidationError as e:
        raise MetadataError(f"Invalid package metadata in {path}:\n{e}") from e
