from fastapi import APIRouter

from coursesync.server._api._dependencies import FacadeDep
from coursesync.server._schemas import ConfigStatusResponse

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/status")
def get_config_status(facade: FacadeDep) -> ConfigStatusResponse:
    return ConfigStatusResponse.from_status(facade.status())
