# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""Repository information read directly from git metadata."""

from dataclasses import dataclass
from pathlib import Path

from coursesync.utils._git._common import (
    decode_bytes,
    discover_repo,
    get_worktree_dir,
    strip_refs_heads,
)

_SYMREF_PREFIX = b"ref: "


@dataclass(frozen=True, slots=True)
class RepositoryInfo:
    """Snapshot of the local repository's identity.

    Attributes:
        initialized: Whether git metadata was found for the project root.
        worktree_dir: Root of the working tree, or None if not initialized.
        branch: Checked-out branch name, or None if detached or uninitialized.
        remote_url: URL of the requested remote, or None if not configured.
    """

    initialized: bool
    worktree_dir: Path | None = None
    branch: str | None = None
    remote_url: str | None = None


def get_repository_info(root: Path, remote: str = "origin") -> RepositoryInfo:
    """Read branch and remote information for the repository at ``root``.

    Never raises for a missing repository; reports ``initialized=False``.

    Args:
        root: Project root (or any directory inside the working tree).
        remote: Remote name whose URL is reported.

    Returns:
        RepositoryInfo describing the repository.
    """
    repo = discover_repo(root)
    if repo is None:
        return RepositoryInfo(initialized=False)

    try:
        branch: str | None = None
        head = repo.refs.read_ref(b"HEAD")
        if head is not None and head.startswith(_SYMREF_PREFIX):
            branch = strip_refs_heads(head[len(_SYMREF_PREFIX) :].strip())

        remote_url: str | None = None
        try:
            url = repo.get_config().get((b"remote", remote.encode()), b"url")
            remote_url = decode_bytes(url) or None
        except KeyError:
            remote_url = None

        return RepositoryInfo(
            initialized=True,
            worktree_dir=get_worktree_dir(repo),
            branch=branch,
            remote_url=remote_url,
        )
    finally:
        repo.close()
