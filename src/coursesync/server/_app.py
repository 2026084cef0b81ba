"""FastAPI application exposing the sync engine to the instructor UI."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coursesync.config import Settings, safe_load_settings
from coursesync.exceptions import CourseSyncError
from coursesync.sync import SyncFacade, SyncResult
from coursesync.utils._logging import create_sync_logger

from ._api import api_router, status_for
from ._schemas import SyncResultResponse


async def _handle_sync_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a classified error raised by a read route as a failed SyncResult."""
    if not isinstance(exc, CourseSyncError):  # pragma: no cover
        raise exc
    result = SyncResult.failure(exc)
    body = SyncResultResponse.from_result(result).model_dump(mode="json", by_alias=True)
    return JSONResponse(content=body, status_code=status_for(result))


def create_app(
    settings: Settings | None = None,
    *,
    facade: SyncFacade | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        settings: Engine settings. Loaded from the environment when omitted.
        facade: Engine instance to serve. Built from ``settings`` when omitted.

    Returns:
        The configured FastAPI application.
    """
    if facade is None:
        if settings is None:
            settings, _ = safe_load_settings()
        facade = SyncFacade.from_settings(settings, logger=create_sync_logger(settings))

    app = FastAPI(title="coursesync", docs_url=None, redoc_url="/api-docs")
    app.state.facade = facade
    app.add_exception_handler(CourseSyncError, _handle_sync_error)
    app.include_router(router=api_router)
    return app
