"""Rewrite version-tagged URLs (``/v1.2.3/``) in documentation files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_VERSION_SEGMENT = re.compile(r"/v([\d.]+)/")


def update_version_references(text: str, version: str, marker: str | None = None) -> str:
    """Point the first ``/v<x.y.z>/`` segment of each matching line at *version*.

    With a *marker*, only lines containing it are touched. Every other line,
    including line endings, is returned unchanged.
    """
    replacement = f"/v{version}/"
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if marker is not None and marker not in line:
            continue
        lines[i] = _VERSION_SEGMENT.sub(lambda _m: replacement, line, count=1)
    return "\n".join(lines)


def update_readme(path: Path, version: str, marker: str | None = None) -> bool:
    """Rewrite *path* in place. Returns True if anything changed."""
    original = path.read_bytes().decode("utf-8")
    updated = update_version_references(original, version, marker)
    if updated == original:
        logger.info("%s already references v%s", path, version)
        return False
    path.write_bytes(updated.encode("utf-8"))
    return True
