"""The command-line interface for coursesync."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated, cast

from cyclopts import App, Parameter
from rich.console import Console

from coursesync.config import safe_load_settings
from coursesync.sync import SyncFacade
from coursesync.utils import create_cli_logger
from coursesync.utils._logging import LogFormatType

from ._commands import register_commands
from ._commands._context import CLIContext, OutputFormat

APP_HELP = "Synchronize course content with a remote git repository."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
    facade: SyncFacade | None = None,
) -> App:
    """Build the CLI application.

    Args:
        console: Console for help and output.
        error_console: Console for parse errors.
        exit_on_error: Exit the process on parse errors instead of raising.
        facade: Sync façade to use instead of one built from the settings.

    Returns:
        The configured cyclopts App. Invoke ``app.meta`` to apply the
        global options.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="coursesync",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        output_format: Annotated[
            OutputFormat, Parameter(name="--format", help="Output format")
        ] = OutputFormat.TEXT,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Launch coursesync with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output and debug logging.
            output_format: Print results as text or JSON.
            project_root: Path to project root directory.
        """
        overrides: dict[str, object] | None = None
        if verbose:
            overrides = {"logging": {"level": "debug"}}

        settings, config_error = safe_load_settings(
            project_root=project_root, overrides=overrides
        )

        log_file = settings.logging.file
        if log_file and not Path(log_file).is_absolute():
            log_file = str(settings.project_root / log_file)
        cli_logger = create_cli_logger(
            level=settings.logging.level.value,
            log_format=cast("LogFormatType", settings.logging.format.value),
            log_file=log_file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            settings=settings,
            verbose=verbose,
            output_format=output_format,
            config_error=config_error,
            logger=cli_logger,
            facade=facade,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `coursesync` CLI."""
    app = create_app()
    app.meta()


app = create_app()
