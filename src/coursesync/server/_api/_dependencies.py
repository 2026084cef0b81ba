from typing import Annotated, cast

from fastapi import Depends, Request

from coursesync.sync import SyncFacade


def get_facade(request: Request) -> SyncFacade:
    return cast("SyncFacade", request.app.state.facade)


FacadeDep = Annotated[SyncFacade, Depends(get_facade)]
