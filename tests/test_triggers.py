"""Tests for glob matching and the file watch trigger."""

from __future__ import annotations

import time

import pytest

from shiprunner.triggers._glob import compile_glob, matches_any, watch_roots
from shiprunner.triggers.base import ChangeEvent
from shiprunner.triggers.file_watcher import FileWatchTrigger, WatchRule


class TestGlob:
    @pytest.mark.parametrize(
        ("pattern", "path"),
        [
            ("src/ajax.js", "src/ajax.js"),
            ("test/**/*.js", "test/spec.js"),
            ("test/**/*.js", "test/unit/deep/spec.js"),
            ("api/**/*.js", "api/server.js"),
            ("src/*.js", "src/a.js"),
            ("src/?.js", "src/a.js"),
            ("src/[ab].js", "src/b.js"),
            ("docs/**", "docs/a/b/c.md"),
        ],
    )
    def test_matches(self, pattern, path):
        assert compile_glob(pattern).match(path)

    @pytest.mark.parametrize(
        ("pattern", "path"),
        [
            ("src/ajax.js", "src/ajax.jsx"),
            ("src/*.js", "src/sub/a.js"),
            ("test/**/*.js", "test/spec.ts"),
            ("test/**/*.js", "other/test/spec.js"),
            ("src/[!ab].js", "src/a.js"),
        ],
    )
    def test_does_not_match(self, pattern, path):
        assert not compile_glob(pattern).match(path)

    def test_matches_any(self):
        patterns = ["src/ajax.js", "test/**/*.js"]
        assert matches_any("test/x.js", patterns)
        assert not matches_any("README.md", patterns)


class TestWatchRoots:
    def test_roots_from_patterns(self, tmp_path):
        roots = watch_roots(["src/ajax.js", "test/**/*.js", "api/**/*.js"], tmp_path)
        assert roots == [tmp_path / "src", tmp_path / "test", tmp_path / "api"]

    def test_nested_roots_collapsed(self, tmp_path):
        roots = watch_roots(["**/*.js", "src/*.js"], tmp_path)
        assert roots == [tmp_path]

    def test_dedup(self, tmp_path):
        assert watch_roots(["src/a.js", "src/b.js"], tmp_path) == [tmp_path / "src"]


class TestWatchRule:
    def test_relative_and_matches(self, tmp_path):
        rule = WatchRule(patterns=("src/*.js",), stages=("test",), base_dir=tmp_path)
        assert rule.relative(str(tmp_path / "src" / "a.js")) == "src/a.js"
        assert rule.matches(str(tmp_path / "src" / "a.js"))
        assert not rule.matches(str(tmp_path / "src" / "a.css"))

    def test_outside_base_dir(self, tmp_path):
        rule = WatchRule(patterns=("**",), stages=("test",), base_dir=tmp_path / "proj")
        assert rule.relative(str(tmp_path / "elsewhere.js")) is None
        assert not rule.matches(str(tmp_path / "elsewhere.js"))


class TestChangeEvent:
    def test_summary(self):
        assert ChangeEvent(paths=()).summary == "(startup)"
        assert ChangeEvent(paths=("a", "b")).summary == "a, b"
        assert ChangeEvent(paths=("a", "b", "c", "d", "e")).summary == "a, b, c (+2 more)"


class TestFileWatchTrigger:
    def _rule(self, tmp_path, *patterns: str) -> WatchRule:
        return WatchRule(
            patterns=patterns, stages=("test", "lint"), base_dir=tmp_path, debounce_seconds=0.1
        )

    def test_start_and_stop(self, tmp_path):
        (tmp_path / "src").mkdir()
        trigger = FileWatchTrigger(self._rule(tmp_path, "src/*.js"), lambda e: None)
        trigger.start()
        time.sleep(0.3)
        trigger.stop()
        assert not trigger.running

    def test_detects_matching_change(self, tmp_path):
        (tmp_path / "src").mkdir()
        events: list[ChangeEvent] = []
        trigger = FileWatchTrigger(self._rule(tmp_path, "src/*.js"), events.append)
        trigger.start()
        time.sleep(0.3)
        (tmp_path / "src" / "ajax.js").write_text("var x;")
        time.sleep(1.0)  # allow debounce + detection
        trigger.stop()
        assert len(events) >= 1
        assert "src/ajax.js" in events[0].paths

    def test_ignores_non_matching_change(self, tmp_path):
        (tmp_path / "src").mkdir()
        events: list[ChangeEvent] = []
        trigger = FileWatchTrigger(self._rule(tmp_path, "src/*.js"), events.append)
        trigger.start()
        time.sleep(0.3)
        (tmp_path / "src" / "notes.txt").write_text("hello")
        time.sleep(1.0)
        trigger.stop()
        assert events == []

    def test_missing_directories_end_quietly(self, tmp_path):
        trigger = FileWatchTrigger(self._rule(tmp_path, "nope/*.js"), lambda e: None)
        trigger.start()
        time.sleep(0.2)
        assert not trigger.running
        trigger.stop()
