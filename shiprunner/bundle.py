"""Build the distributable bundle: concatenate, minify, prepend a banner."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from shiprunner.errors import BundleError, ShiprunnerError
from shiprunner.pipeline.process import capture_output
from shiprunner.pipeline.schema import Command
from shiprunner.project.metadata import PackageMetadata

logger = logging.getLogger(__name__)


def render_banner(meta: PackageMetadata, generated_at: datetime | None = None) -> str:
    """Return the license header comment placed at the top of the bundle."""
    generated_at = generated_at or datetime.now(UTC)
    owner = f" (c) {meta.author}" if meta.author else ""
    return "\n".join(
        [
            "/**!",
            f" * {meta.display_name} - v{meta.version}",
            f" * {meta.description}",
            f" * {meta.homepage}",
            "",
            f" * {generated_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
            f" * {meta.license}{owner}",
            "*/",
            "",
        ]
    )


def concat_sources(paths: list[Path]) -> str:
    parts: list[str] = []
    for path in paths:
        try:
            parts.append(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise BundleError(f"Cannot read source {path}: {e}") from e
    return "\n".join(parts)


def build_bundle(
    sources: list[Path],
    output: Path,
    meta: PackageMetadata,
    *,
    minifier: Command | None = None,
    base_dir: Path | None = None,
    generated_at: datetime | None = None,
) -> Path:
    """Write ``banner + minify(concat(sources))`` to *output* and return it."""
    code = concat_sources(sources)

    if minifier is not None:
        logger.debug("minifying %d source(s) with `%s`", len(sources), minifier)
        try:
            code = capture_output(minifier, code, base_dir=base_dir)
        except ShiprunnerError as e:
            raise BundleError(f"Minification failed: {e}") from e

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(render_banner(meta, generated_at) + code, encoding="utf-8")
    except OSError as e:
        raise BundleError(f"Cannot write {output}: {e}") from e

    logger.info("wrote %s (%s)", output, meta.tag)
    return output
