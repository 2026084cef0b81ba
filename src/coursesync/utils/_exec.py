"""Execution utilities for external commands.

This module runs external programs with timeout handling, output capture and
error classification, without ever involving a shell.
"""

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

# Default timeout in milliseconds
DEFAULT_TIMEOUT_MS: int = 30000  # 30 seconds

# Maximum output size in bytes
MAX_OUTPUT_BYTES: int = 102400  # 100KB


@dataclass(frozen=True, slots=True)
class CommandConfig:
    """Configuration for command execution.

    Attributes:
        argv: Program and arguments; never passed through a shell.
        cwd: Working directory for execution.
        env: Additional environment variables to set.
        stdin: Optional stdin data to pipe to the command.
        timeout_ms: Execution timeout in milliseconds.
    """

    argv: tuple[str, ...]
    cwd: str | Path | None = None
    env: dict[str, str] = field(default_factory=dict)
    stdin: bytes | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result from command execution.

    Attributes:
        success: Whether the process ran to completion (regardless of exit code).
        exit_code: Process exit code, or None if execution failed.
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        error: Error message if execution failed (timeout, not found, etc.).
        timed_out: Whether the command timed out.
        command_not_found: Whether the program was not found.
    """

    success: bool
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    timed_out: bool = False
    command_not_found: bool = False

    @property
    def ok(self) -> bool:
        """True when the process completed with exit code 0."""
        return self.success and self.exit_code == 0


def truncate_output(output: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate output to max bytes, preserving valid UTF-8.

    Args:
        output: The string to truncate.
        max_bytes: Maximum size in bytes.

    Returns:
        Truncated string with indicator if truncated.
    """
    if not output:
        return output

    encoded = output.encode("utf-8")
    if len(encoded) <= max_bytes:
        return output

    # Use 'ignore' to skip incomplete multi-byte sequences at the end
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")

    return truncated + "\n... [output truncated]"


def run_command(config: CommandConfig) -> CommandResult:
    """Execute an external program.

    Handles timeouts, missing programs, and captures stdout/stderr. A non-zero
    exit code is not an execution failure: callers inspect ``exit_code``.

    Args:
        config: Command configuration specifying argv, env, cwd, timeout, etc.

    Returns:
        CommandResult with execution outcome.
    """
    if not config.argv:
        return CommandResult(success=False, error="No command specified")

    env = {**os.environ, **config.env}
    cwd = str(config.cwd) if config.cwd else None
    timeout_seconds = config.timeout_ms / 1000.0

    try:
        result = subprocess.run(  # noqa: S603
            list(config.argv),
            env=env,
            cwd=cwd,
            input=config.stdin,
            capture_output=True,
            timeout=timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            success=False,
            error=f"Command timed out after {timeout_seconds}s",
            timed_out=True,
        )
    except FileNotFoundError as e:
        return CommandResult(success=False, error=str(e), command_not_found=True)
    except OSError as e:
        return CommandResult(success=False, error=str(e))

    return CommandResult(
        success=True,
        exit_code=result.returncode,
        stdout=result.stdout.decode("utf-8", errors="replace"),
        stderr=truncate_output(result.stderr.decode("utf-8", errors="replace")),
    )
