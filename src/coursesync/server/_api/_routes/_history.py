from typing import Annotated

from fastapi import APIRouter, Query

from coursesync.server._api._dependencies import FacadeDep
from coursesync.server._schemas import CommitRecordResponse

router = APIRouter(prefix="", tags=["history"])


@router.get("/history")
def get_history(
    facade: FacadeDep,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> list[CommitRecordResponse]:
    return [CommitRecordResponse.from_record(r) for r in facade.history(limit)]
