# pyright: reportUnusedCallResult=false
"""Repository commands: status, changes, pull, push, sync and log."""

from typing import Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coursesync.cli._commands._context import CLIContext, OutputFormat
from coursesync.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    exit_with_result,
    print_models,
)
from coursesync.exceptions import SyncValidationError
from coursesync.server._schemas import (
    ChangeSetResponse,
    CommitRecordResponse,
    ConfigStatusResponse,
)

__all__ = ["changes", "log", "pull", "push", "status", "sync"]


def status() -> None:
    """Show sync configuration and repository status."""
    ctx = CLIContext.get_current()
    sync_status = ctx.get_facade().status()

    if ctx.output_format == OutputFormat.JSON:
        print_models(ConfigStatusResponse.from_status(sync_status))
        return

    console = Console()
    repo_state = (
        "[green]initialized[/green]"
        if sync_status.initialized
        else "[red]not initialized[/red]"
    )
    console.print(f"[bold]Repository:[/bold] {repo_state}")
    console.print(f"[bold]Branch:[/bold] {escape(sync_status.branch or '-')}")
    console.print(f"[bold]Remote:[/bold] {escape(sync_status.remote_url or '-')}")

    config = sync_status.config
    if config is None:
        console.print(
            f"[yellow]Sync configuration unavailable:[/yellow] "
            f"{escape(sync_status.config_error or 'unknown error')}"
        )
        return
    console.print(f"[bold]Repository id:[/bold] {escape(config.repository_identifier)}")
    console.print(f"[bold]Tracking:[/bold] {escape(sync_status.remote_branch or '-')}")
    console.print(f"[bold]Content path:[/bold] {escape(config.content_sub_path)}")


def changes() -> None:
    """List local content changes relative to the content path."""
    ctx = CLIContext.get_current()
    change_set = ctx.get_facade().changes()

    if ctx.output_format == OutputFormat.JSON:
        print_models(ChangeSetResponse.from_change_set(change_set))
        return

    console = Console()
    if change_set.is_empty:
        console.print("No local changes")
        return

    sections = (
        ("Staged", "green", change_set.staged),
        ("Unstaged", "yellow", change_set.unstaged),
        ("Untracked", "red", change_set.untracked),
    )
    for title, color, paths in sections:
        if not paths:
            continue
        console.print(f"[bold {color}]{title}[/bold {color}] ({len(paths)})")
        for path in sorted(paths):
            console.print(f"  {escape(path)}")


def pull() -> None:
    """Fast-forward content from the remote branch."""
    ctx = CLIContext.get_current()
    exit_with_result(ctx.get_facade().pull())


def push(
    *,
    message: Annotated[
        str, Parameter(name=["--message", "-m"], help="Commit message.")
    ],
) -> None:
    """Commit and push local content changes."""
    ctx = CLIContext.get_current()
    exit_with_result(ctx.get_facade().push(message))


def sync(
    *,
    message: Annotated[
        str | None,
        Parameter(
            name=["--message", "-m"],
            help="Commit message. Without it only the pull runs.",
        ),
    ] = None,
) -> None:
    """Pull, then push local changes when a message is given."""
    ctx = CLIContext.get_current()
    exit_with_result(ctx.get_facade().sync(message))


def log(
    *,
    limit: Annotated[
        int | None,
        Parameter(name=["--limit", "-n"], help="Maximum number of commits."),
    ] = None,
) -> None:
    """Show recent commits touching the content path."""
    ctx = CLIContext.get_current()
    try:
        records = ctx.get_facade().history(limit)
    except SyncValidationError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)

    if ctx.output_format == OutputFormat.JSON:
        print_models([CommitRecordResponse.from_record(r) for r in records])
        return

    console = Console()
    if not records:
        console.print("No history")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Commit", style="cyan")
    table.add_column("Date")
    table.add_column("Author")
    table.add_column("Files", justify="right")
    table.add_column("Message")
    for record in records:
        table.add_row(
            record.sha[:12],
            record.date.strftime("%Y-%m-%d %H:%M"),
            escape(record.author),
            str(record.files_changed_count),
            escape(record.message),
        )
    console.print(table)
