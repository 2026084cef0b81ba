from fastapi import APIRouter

from coursesync.server._api._dependencies import FacadeDep
from coursesync.server._schemas import ChangeSetResponse

router = APIRouter(prefix="", tags=["changeset"])


@router.get("/changeset")
def get_changeset(facade: FacadeDep) -> ChangeSetResponse:
    return ChangeSetResponse.from_change_set(facade.changes())
