# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Content file commands: files, write and delete."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.markup import escape

from coursesync.cli._commands._context import CLIContext, OutputFormat
from coursesync.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    exit_with_result,
    print_models,
)
from coursesync.server._schemas import FileStatusResponse

__all__ = ["delete", "files", "write"]


def files() -> None:
    """List content files with their change state."""
    ctx = CLIContext.get_current()
    statuses = ctx.get_facade().files()

    if ctx.output_format == OutputFormat.JSON:
        print_models([FileStatusResponse.from_status(s) for s in statuses])
        return

    console = Console()
    if not statuses:
        console.print("No content files")
        return

    for file_status in statuses:
        if file_status.is_new:
            marker = "[red]new[/red]     "
        elif file_status.has_changes:
            marker = "[yellow]changed[/yellow] "
        else:
            marker = "        "
        console.print(f"{marker}{escape(file_status.relative_path)}")


def write(
    path: Annotated[str, Parameter(help="Path relative to the content directory.")],
    *,
    content: Annotated[
        str | None, Parameter(help="File content. Scaffolded when omitted.")
    ] = None,
    from_file: Annotated[
        Path | None,
        Parameter(name="--from-file", help="Read the file content from FILE."),
    ] = None,
) -> None:
    """Create or overwrite a content file."""
    if content is not None and from_file is not None:
        exit_with_error(
            "--content and --from-file are mutually exclusive",
            ExitCode.VALIDATION_ERROR,
        )

    if from_file is not None:
        try:
            content = from_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            exit_with_error(f"File not found: {from_file}", ExitCode.NOT_FOUND)
        except OSError as e:
            exit_with_error(f"Cannot read {from_file}: {e}", ExitCode.IO_ERROR)

    ctx = CLIContext.get_current()
    exit_with_result(ctx.get_facade().save_file(path, content))


def delete(
    path: Annotated[str, Parameter(help="Path relative to the content directory.")],
) -> None:
    """Delete a content file."""
    ctx = CLIContext.get_current()
    exit_with_result(ctx.get_facade().delete_file(path))
