"""Mapping of failure kinds to HTTP status codes."""

from typing import Final

from fastapi import status

from coursesync.enums import ErrorKind
from coursesync.sync import SyncResult

ERROR_STATUS: Final[dict[ErrorKind, int]] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NON_FAST_FORWARD: status.HTTP_409_CONFLICT,
    ErrorKind.INDEX_LOCKED: status.HTTP_409_CONFLICT,
    ErrorKind.REMOTE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


def status_for(result: SyncResult) -> int:
    """HTTP status code for a SyncResult (200 on success, 500 if unmapped)."""
    if result.success:
        return status.HTTP_200_OK
    if result.error_kind is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return ERROR_STATUS.get(result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
