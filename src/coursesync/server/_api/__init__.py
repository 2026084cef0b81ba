from ._routes import router as api_router
from ._status import ERROR_STATUS, status_for

__all__ = ["ERROR_STATUS", "api_router", "status_for"]
