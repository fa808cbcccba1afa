"""Tests for the command runners."""

from __future__ import annotations

import sys

import pytest

from shiprunner.errors import CommandFailure, SpawnError
from shiprunner.pipeline.process import CommandRunner, DryRunRunner, capture_output
from shiprunner.pipeline.schema import Command
from tests.conftest import py


class TestCommandRunner:
    def test_returns_zero_on_success(self, tmp_path):
        assert CommandRunner(tmp_path).run(py("pass")) == 0

    def test_non_zero_exit_is_returned_not_raised(self, tmp_path):
        assert CommandRunner(tmp_path).run(py("raise SystemExit(5)")) == 5

    def test_missing_program_raises_spawn_error(self, tmp_path):
        cmd = Command.parse("shiprunner-no-such-program arg")
        with pytest.raises(SpawnError) as excinfo:
            CommandRunner(tmp_path).run(cmd)
        assert excinfo.value.command is cmd
        assert isinstance(excinfo.value.cause, OSError)
        assert "shiprunner-no-such-program" in str(excinfo.value)

    def test_runs_in_base_dir(self, tmp_path):
        CommandRunner(tmp_path).run(py("open('here', 'w').close()"))
        assert (tmp_path / "here").exists()

    def test_relative_cwd_resolved_against_base_dir(self, tmp_path):
        (tmp_path / "sub").mkdir()
        CommandRunner(tmp_path).run(py("open('here', 'w').close()", cwd="sub"))
        assert (tmp_path / "sub" / "here").exists()

    def test_missing_cwd_is_spawn_error(self, tmp_path):
        with pytest.raises(SpawnError):
            CommandRunner(tmp_path).run(py("pass", cwd="does-not-exist"))

    def test_arguments_not_shell_split(self, tmp_path):
        out = tmp_path / "out.txt"
        cmd = Command(
            program=sys.executable,
            args=(
                "-c",
                "import sys; open(sys.argv[1], 'w').write(sys.argv[2])",
                str(out),
                "a b && c",
            ),
        )
        assert CommandRunner(tmp_path).run(cmd) == 0
        assert out.read_text() == "a b && c"


class TestDryRunRunner:
    def test_records_and_succeeds(self, capsys):
        runner = DryRunRunner()
        cmd = Command.parse("git push origin master --tags")
        assert runner.run(cmd) == 0
        assert runner.commands == [cmd]
        assert "git push origin master --tags" in capsys.readouterr().out

    def test_shows_cwd(self, capsys):
        DryRunRunner().run(Command.parse("git add -A", cwd=".tmp"))
        assert "(in .tmp)" in capsys.readouterr().out


class TestCaptureOutput:
    def test_pipes_stdin_to_stdout(self, tmp_path):
        upper = py("import sys; sys.stdout.write(sys.stdin.read().upper())")
        assert capture_output(upper, "var x = 1;", base_dir=tmp_path) == "VAR X = 1;"

    def test_non_zero_exit_raises(self, tmp_path):
        with pytest.raises(CommandFailure) as excinfo:
            capture_output(py("raise SystemExit(2)"), "", base_dir=tmp_path)
        assert excinfo.value.returncode == 2

    def test_missing_program_raises(self, tmp_path):
        with pytest.raises(SpawnError):
            capture_output(Command.parse("shiprunner-no-such-minifier"), "x", base_dir=tmp_path)
