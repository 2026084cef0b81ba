"""Unit tests for coursesync.utils._exec."""

import sys
from pathlib import Path

import pytest

from coursesync.utils import CommandConfig, CommandResult, run_command, truncate_output


class TestCommandConfig:
    def test_default_values(self) -> None:
        config = CommandConfig(argv=("git", "status"))
        assert config.cwd is None
        assert config.env == {}
        assert config.stdin is None
        assert config.timeout_ms == 30000

    def test_frozen(self) -> None:
        config = CommandConfig(argv=("git",))
        with pytest.raises(AttributeError):
            config.argv = ("rm",)  # pyright: ignore[reportAttributeAccessIssue]


class TestCommandResult:
    def test_ok_requires_zero_exit_code(self) -> None:
        assert CommandResult(success=True, exit_code=0).ok is True
        assert CommandResult(success=True, exit_code=1).ok is False
        assert CommandResult(success=False, timed_out=True).ok is False


class TestTruncateOutput:
    def test_empty_string(self) -> None:
        assert truncate_output("") == ""

    def test_short_string_unchanged(self) -> None:
        assert truncate_output("hello world") == "hello world"

    def test_truncates_long_string(self) -> None:
        result = truncate_output("x" * 200, max_bytes=100)
        assert result == "x" * 100 + "\n... [output truncated]"

    def test_preserves_utf8(self) -> None:
        result = truncate_output("こんにちは" * 50, max_bytes=50)
        _ = result.encode("utf-8")
        assert result.endswith("... [output truncated]")


class TestRunCommand:
    def test_captures_output(self) -> None:
        config = CommandConfig(argv=(sys.executable, "-c", "print('hello')"))

        result = run_command(config)

        assert result.ok is True
        assert result.stdout.strip() == "hello"

    def test_non_zero_exit_is_not_an_execution_failure(self) -> None:
        script = "import sys; sys.stderr.write('bad'); sys.exit(3)"

        result = run_command(CommandConfig(argv=(sys.executable, "-c", script)))

        assert result.success is True
        assert result.exit_code == 3
        assert result.stderr == "bad"

    def test_passes_env_stdin_and_cwd(self, tmp_path: Path) -> None:
        script = (
            "import os, sys; "
            "print(os.environ['COURSESYNC_TEST'], sys.stdin.read(), os.getcwd())"
        )
        config = CommandConfig(
            argv=(sys.executable, "-c", script),
            cwd=tmp_path,
            env={"COURSESYNC_TEST": "value"},
            stdin=b"piped",
        )

        result = run_command(config)

        value, piped, cwd = result.stdout.split()
        assert (value, piped) == ("value", "piped")
        assert Path(cwd).resolve() == tmp_path.resolve()

    def test_timeout(self) -> None:
        config = CommandConfig(
            argv=(sys.executable, "-c", "import time; time.sleep(5)"),
            timeout_ms=100,
        )

        result = run_command(config)

        assert result.success is False
        assert result.timed_out is True
        assert result.exit_code is None

    def test_missing_program(self) -> None:
        result = run_command(CommandConfig(argv=("coursesync-no-such-program",)))

        assert result.success is False
        assert result.command_not_found is True

    def test_empty_argv(self) -> None:
        result = run_command(CommandConfig(argv=()))

        assert result.success is False
        assert result.error == "No command specified"
