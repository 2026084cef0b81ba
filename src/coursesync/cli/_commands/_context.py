# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once at CLI startup by the meta app and made available
to all commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum

from structlog.typing import FilteringBoundLogger

from coursesync.config import Settings
from coursesync.sync import SyncFacade


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    TEXT = "text"
    JSON = "json"


_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with settings and options.

    Attributes:
        settings: Loaded engine settings.
        verbose: Enable verbose output with additional details.
        output_format: Format used by commands that print data.
        config_error: Error message if settings loading failed.
        logger: Structured logger for CLI commands.
        facade: Pre-built sync façade. Built from ``settings`` on demand
            when None.
    """

    settings: Settings = field(repr=False)
    verbose: bool = False
    output_format: OutputFormat = OutputFormat.TEXT
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)
    facade: SyncFacade | None = field(default=None, repr=False)

    def get_facade(self) -> SyncFacade:
        """Return the sync façade for this invocation."""
        if self.facade is not None:
            return self.facade
        return SyncFacade.from_settings(self.settings, logger=self.logger)

    @classmethod
    def get_current(cls) -> "CLIContext":  # noqa: UP037
        """Get current active CLIContext, or create a default if not set.

        Returns:
            The currently active CLIContext, or a default instance rooted at
            the current directory if none is set.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(settings=Settings())

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:  # noqa: UP037
        """Set the current active CLIContext.

        Args:
            ctx: The CLIContext to set as current.
        """
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
