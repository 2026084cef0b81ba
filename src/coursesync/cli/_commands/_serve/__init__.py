# pyright: reportUnusedCallResult=false
"""coursesync API server command."""

from typing import Annotated, Literal

from cyclopts import App, Parameter

from coursesync.cli._commands._context import CLIContext

app = App(name="serve", help="Run the coursesync API server", help_on_error=True)

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


@app.default
def serve(
    *,
    host: Annotated[
        str,
        Parameter(help="Bind socket to this host."),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        Parameter(help="Bind socket to this port."),
    ] = 8000,
    log_level: Annotated[
        LogLevel,
        Parameter(help="Log level."),
    ] = "info",
    access_log: Annotated[
        bool,
        Parameter(help="Enable access log."),
    ] = True,
) -> None:
    """Run the coursesync API server using uvicorn."""
    import uvicorn

    from coursesync.server import create_app

    ctx = CLIContext.get_current()
    api = create_app(ctx.settings, facade=ctx.facade)
    if ctx.logger is not None:
        ctx.logger.info("server_starting", host=host, port=port)

    uvicorn.run(
        api,
        host=host,
        port=port,
        log_level=log_level,
        access_log=access_log,
    )
