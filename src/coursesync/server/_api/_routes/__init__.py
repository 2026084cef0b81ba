from fastapi import APIRouter

from ._changeset import router as changeset_router
from ._config import router as config_router
from ._files import router as files_router
from ._health import router as health_router
from ._history import router as history_router
from ._sync import router as sync_router

router = APIRouter(prefix="/api")

router.include_router(health_router)
router.include_router(changeset_router)
router.include_router(files_router)
router.include_router(config_router)
router.include_router(sync_router)
router.include_router(history_router)
