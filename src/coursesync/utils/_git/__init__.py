"""Git utilities for coursesync.

This package provides helpers that read git metadata directly (through
dulwich) without running the git executable.
"""

from coursesync.utils._git._author import (
    DEFAULT_AUTHOR_EMAIL,
    DEFAULT_AUTHOR_NAME,
    AuthorInfo,
    get_author_info,
)
from coursesync.utils._git._common import (
    decode_bytes,
    discover_repo,
    get_worktree_dir,
    strip_refs_heads,
)
from coursesync.utils._git._info import RepositoryInfo, get_repository_info

__all__ = [
    "DEFAULT_AUTHOR_EMAIL",
    "DEFAULT_AUTHOR_NAME",
    "AuthorInfo",
    "RepositoryInfo",
    "decode_bytes",
    "discover_repo",
    "get_author_info",
    "get_repository_info",
    "get_worktree_dir",
    "strip_refs_heads",
]
