"""coursesync CLI commands."""
# pyright: reportUnusedCallResult=false

from cyclopts import App

from ._context import CLIContext, OutputFormat
from ._files import delete, files, write
from ._serve import app as serve_app
from ._shared import (
    ExitCode,
    FormattableData,
    exit_code_for,
    exit_with_error,
    exit_with_result,
    format_json,
    get_error_console,
    print_models,
)
from ._sync import changes, log, pull, push, status, sync

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "exit_code_for",
    "exit_with_error",
    "exit_with_result",
    "format_json",
    "get_error_console",
    "print_models",
    "register_commands",
    "serve_app",
]


def register_commands(app: App) -> None:
    app.command(status, name="status")
    app.command(changes, name="changes")
    app.command(files, name="files")
    app.command(pull, name="pull")
    app.command(push, name="push")
    app.command(sync, name="sync")
    app.command(log, name="log")
    app.command(write, name="write")
    app.command(delete, name="delete")
    app.command(serve_app)
