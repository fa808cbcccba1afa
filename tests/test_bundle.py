"""Tests for bundle banner and build."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from shiprunner.bundle import build_bundle, concat_sources, render_banner
from shiprunner.errors import BundleError
from shiprunner.project.metadata import PackageMetadata
from tests.conftest import py

META = PackageMetadata(
    name="X",
    version="1.2.3",
    description="A tiny library",
    homepage="https://example.com/x",
    license="MIT",
    author="Jane Doe",
)
WHEN = datetime(2026, 10, 19, 8, 30, 0, tzinfo=UTC)


class TestRenderBanner:
    def test_contains_version_and_license(self):
        banner = render_banner(META, WHEN)
        assert "v1.2.3" in banner
        assert "MIT" in banner

    def test_layout(self):
        lines = render_banner(META, WHEN).split("\n")
        assert lines[0] == "/**!"
        assert lines[1] == " * X - v1.2.3"
        assert lines[2] == " * A tiny library"
        assert lines[3] == " * https://example.com/x"
        assert lines[4] == ""
        assert lines[5] == " * 2026-10-19 08:30:00 UTC"
        assert lines[6] == " * MIT (c) Jane Doe"
        assert lines[7] == "*/"

    def test_scope_stripped_from_name(self):
        meta = META.model_copy(update={"name": "@fdaciuk/ajax"})
        assert " * ajax - v1.2.3" in render_banner(meta, WHEN)

    def test_no_author(self):
        meta = META.model_copy(update={"author": ""})
        assert " * MIT\n" in render_banner(meta, WHEN)


class TestBuildBundle:
    def test_concatenates_in_order(self, tmp_path):
        a = tmp_path / "a.js"
        b = tmp_path / "b.js"
        a.write_text("var a = 1;")
        b.write_text("var b = 2;")
        assert concat_sources([a, b]) == "var a = 1;\nvar b = 2;"

    def test_writes_banner_and_code(self, tmp_path):
        src = tmp_path / "src" / "ajax.js"
        src.parent.mkdir()
        src.write_text("function ajax() {}")
        out = tmp_path / "dist" / "ajax.min.js"

        result = build_bundle([src], out, META, generated_at=WHEN)

        assert result == out
        text = out.read_text()
        assert text.startswith("/**!\n * X - v1.2.3\n")
        assert text.endswith("*/\nfunction ajax() {}")

    def test_minifier_filters_code(self, tmp_path):
        src = tmp_path / "a.js"
        src.write_text("var  answer  =  42;")
        out = tmp_path / "out.js"
        squash = py("import sys; sys.stdout.write(' '.join(sys.stdin.read().split()))")

        build_bundle([src], out, META, minifier=squash, base_dir=tmp_path, generated_at=WHEN)

        assert out.read_text().endswith("*/\nvar answer = 42;")

    def test_failing_minifier_raises_bundle_error(self, tmp_path):
        src = tmp_path / "a.js"
        src.write_text("x")
        out = tmp_path / "out.js"
        with pytest.raises(BundleError, match="Minification failed"):
            build_bundle([src], out, META, minifier=py("raise SystemExit(1)"), base_dir=tmp_path)
        assert not out.exists()

    def test_missing_source_raises_bundle_error(self, tmp_path):
        with pytest.raises(BundleError, match="Cannot read source"):
            build_bundle([tmp_path / "nope.js"], tmp_path / "out.js", META)
