"""Version-control data models.

This module defines the value objects returned by version-control adapters.
"""

from dataclasses import dataclass
from typing import Final

# Object id of the empty tree; diffing against it lists every file.
EMPTY_TREE: Final = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One entry of a porcelain status listing.

    Attributes:
        index_status: Status of the path in the index relative to HEAD
            (``" "`` when unchanged, ``"?"`` when untracked).
        worktree_status: Status of the path in the working tree relative to
            the index (``" "`` when unchanged, ``"?"`` when untracked).
        path: Repository-relative, slash-separated path.
        orig_path: Source path of a rename or copy, otherwise None.
    """

    index_status: str
    worktree_status: str
    path: str
    orig_path: str | None = None


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One commit from a log query.

    Attributes:
        sha: Full commit hash.
        author: Author name.
        date: Author date in strict ISO 8601 form.
        message: Commit subject line.
    """

    sha: str
    author: str
    date: str
    message: str
