"""Command-line interface for coursesync."""

from ._app import app, create_app, main
from ._commands._context import CLIContext, OutputFormat

__all__ = ["CLIContext", "OutputFormat", "app", "create_app", "main"]
