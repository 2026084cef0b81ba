from fastapi import APIRouter, Response

from coursesync.exceptions import ConfigurationMissingError
from coursesync.server._api._dependencies import FacadeDep
from coursesync.server._api._status import status_for
from coursesync.server._schemas import (
    FileContentResponse,
    FileStatusResponse,
    SaveFileRequest,
    SyncResultResponse,
)

router = APIRouter(prefix="/files", tags=["files"])


@router.get("")
def list_files(facade: FacadeDep) -> list[FileStatusResponse]:
    return [FileStatusResponse.from_status(status) for status in facade.files()]


@router.post("")
def save_file(
    body: SaveFileRequest, facade: FacadeDep, response: Response
) -> SyncResultResponse:
    result = facade.save_file(body.relative_path, body.content)
    response.status_code = status_for(result)
    return SyncResultResponse.from_result(result)


@router.get("/{relative_path:path}")
def read_file(relative_path: str, facade: FacadeDep) -> FileContentResponse:
    file = facade.read_file(relative_path)
    try:
        links = facade.links(file.relative_path)
    except ConfigurationMissingError:
        links = None
    return FileContentResponse.from_file(file, links)


@router.delete("/{relative_path:path}")
def delete_file(
    relative_path: str, facade: FacadeDep, response: Response
) -> SyncResultResponse:
    result = facade.delete_file(relative_path)
    response.status_code = status_for(result)
    return SyncResultResponse.from_result(result)
