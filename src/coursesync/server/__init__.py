"""HTTP API for the content synchronization engine.

Run with ``coursesync serve`` or ``uvicorn --factory coursesync.server:create_app``.
"""

from ._app import create_app

__all__ = ["create_app"]
