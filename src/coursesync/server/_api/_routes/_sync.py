from fastapi import APIRouter, Response

from coursesync.server._api._dependencies import FacadeDep
from coursesync.server._api._status import status_for
from coursesync.server._schemas import SyncRequest, SyncResultResponse

router = APIRouter(prefix="", tags=["sync"])


@router.post("/sync")
def post_sync(
    body: SyncRequest, facade: FacadeDep, response: Response
) -> SyncResultResponse:
    """Run a pull, a push or a pull followed by a push."""
    result = facade.run(body.action, body.commit_message)
    response.status_code = status_for(result)
    return SyncResultResponse.from_result(result)
