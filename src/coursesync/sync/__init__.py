"""Content synchronization engine.

``SyncFacade`` is the entry point; the individual operations are exported
for callers that compose them differently.
"""

from ._facade import SyncFacade
from ._history import HistoryReader, parse_commit_date
from ._inspector import RepositoryInspector, scope_relative
from ._links import build_links, render_link
from ._models import (
    ChangeSet,
    CommitRecord,
    FileLinks,
    FileStatus,
    SyncResult,
    SyncStatus,
)
from ._pull import ALREADY_UP_TO_DATE, PullOperation
from ._push import NOTHING_TO_PUSH, PushOperation, validate_commit_message

__all__ = [
    "ALREADY_UP_TO_DATE",
    "NOTHING_TO_PUSH",
    "ChangeSet",
    "CommitRecord",
    "FileLinks",
    "FileStatus",
    "HistoryReader",
    "PullOperation",
    "PushOperation",
    "RepositoryInspector",
    "SyncFacade",
    "SyncResult",
    "SyncStatus",
    "build_links",
    "parse_commit_date",
    "render_link",
    "scope_relative",
    "validate_commit_message",
]
