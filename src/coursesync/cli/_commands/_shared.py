# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes and their mapping from sync error kinds
- JSON output formatting
- Console utilities for error handling
"""

from collections.abc import Sequence
from enum import IntEnum
from typing import Any, Never

import orjson
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from coursesync.enums import ErrorKind
from coursesync.server._schemas import SyncResultResponse
from coursesync.sync import SyncResult

from ._context import CLIContext, OutputFormat

# Type alias for formattable data - uses Any to match library signatures
FormattableData = dict[str, Any] | list[Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_code_for",
    "exit_with_error",
    "exit_with_result",
    "format_json",
    "get_error_console",
    "print_models",
]


class ExitCode(IntEnum):
    """Standard exit codes for coursesync CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


_EXIT_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.CONFIGURATION_MISSING: ExitCode.LOAD_ERROR,
    ErrorKind.VALIDATION: ExitCode.VALIDATION_ERROR,
    ErrorKind.NOT_FOUND: ExitCode.NOT_FOUND,
    ErrorKind.FILESYSTEM: ExitCode.IO_ERROR,
}


def exit_code_for(kind: ErrorKind | None) -> ExitCode:
    """Map a sync error kind to a process exit code.

    Repository and remote failures map to INTERNAL_ERROR.
    """
    if kind is None:
        return ExitCode.SUCCESS
    return _EXIT_CODES.get(kind, ExitCode.INTERNAL_ERROR)


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Dictionary or list to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr.

    Returns:
        Console instance writing to stderr.
    """
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)


def print_models(models: BaseModel | Sequence[BaseModel]) -> None:
    """Print API models as camelCase JSON on stdout."""
    if isinstance(models, BaseModel):
        data: FormattableData = models.model_dump(mode="json", by_alias=True)
    else:
        data = [model.model_dump(mode="json", by_alias=True) for model in models]
    print(format_json(data))  # noqa: T201


def exit_with_result(result: SyncResult) -> None:
    """Report a sync result and exit non-zero when it failed.

    Args:
        result: Outcome of a façade operation.

    Raises:
        SystemExit: When the result is a failure.
    """
    ctx = CLIContext.get_current()
    if ctx.output_format == OutputFormat.JSON:
        print_models(SyncResultResponse.from_result(result))
        if not result.success:
            raise SystemExit(exit_code_for(result.error_kind))
        return

    if not result.success:
        message = result.message
        if ctx.verbose and result.error_detail:
            message = f"{message} ({result.error_detail})"
        exit_with_error(message, exit_code_for(result.error_kind))

    console = Console()
    console.print(f"[bold green]✓[/bold green] {escape(result.message)}")
    if ctx.verbose:
        for path in result.files_changed:
            console.print(f"  {escape(path)}")
    if result.commit_hash:
        console.print(f"  commit [cyan]{result.commit_hash[:12]}[/cyan]")
