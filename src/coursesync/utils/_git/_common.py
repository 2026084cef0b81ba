"""Common git utility functions.

This module provides shared helper functions used by git-related utilities
including repository discovery, path handling, and byte/string conversion.
"""

from pathlib import Path

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo


def decode_bytes(value: bytes | str) -> str:
    """Decode bytes to str if needed.

    Args:
        value: A bytes or str value.

    Returns:
        The value as a string.
    """
    if isinstance(value, bytes):
        return value.decode()
    return value


def discover_repo(cwd: Path | str | None = None) -> Repo | None:
    """Discover git repository from the given directory.

    Args:
        cwd: Directory to start search from. If None, uses current directory.

    Returns:
        Repo instance if found, None otherwise.
    """
    try:
        if cwd is not None:
            return Repo.discover(str(cwd))
        return Repo.discover()
    except NotGitRepository:
        return None


def get_worktree_dir(repo: Repo) -> Path:
    """Get the worktree directory for a repository.

    Args:
        repo: The repository instance.

    Returns:
        Path to the worktree directory.
    """
    path = Path(decode_bytes(repo.path))
    # If path is .git directory, return parent
    if path.name == ".git":
        return path.parent
    return path


def strip_refs_heads(branch: bytes | str | None) -> str | None:
    """Strip refs/heads/ prefix from a branch reference.

    Args:
        branch: Branch reference (bytes or str), possibly with refs/heads/ prefix.

    Returns:
        Branch name without prefix, or None if input is None.
    """
    if branch is None:
        return None
    branch_str = decode_bytes(branch)
    if branch_str.startswith("refs/heads/"):
        return branch_str[11:]
    return branch_str
