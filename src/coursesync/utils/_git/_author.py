"""Author information resolution utilities."""

import os
from dataclasses import dataclass
from pathlib import Path

from coursesync.utils._git._common import decode_bytes, discover_repo

DEFAULT_AUTHOR_NAME = "Course Sync"
DEFAULT_AUTHOR_EMAIL = "coursesync@localhost"


@dataclass(slots=True, frozen=True)
class AuthorInfo:
    """Resolved author information.

    Attributes:
        name: Author name, or None if not found.
        email: Author email, or None if not found.
    """

    name: str | None
    email: str | None


def get_author_info(root: Path | None = None) -> AuthorInfo:
    """Resolve author info from environment variables or git config.

    Resolution order:
    1. Environment variables (COURSESYNC_AUTHOR_NAME, COURSESYNC_AUTHOR_EMAIL)
    2. Git config (user.name, user.email) as seen from ``root``

    Args:
        root: Directory whose repository configuration is consulted.

    Returns:
        AuthorInfo with resolved name and email (either may be None).
    """
    name = os.environ.get("COURSESYNC_AUTHOR_NAME") or _git_config(root, "name")
    email = os.environ.get("COURSESYNC_AUTHOR_EMAIL") or _git_config(root, "email")

    return AuthorInfo(name=name, email=email)


def _git_config(root: Path | None, key: str) -> str | None:
    """Read a ``user.<key>`` value from the repository's config stack.

    Args:
        root: Directory to discover the repository from.
        key: Key within the ``user`` section (e.g., "name").

    Returns:
        The config value, or None if not set or no repository is found.
    """
    repo = discover_repo(root)
    if repo is None:
        return None
    try:
        value = repo.get_config_stack().get((b"user",), key.encode())
    except KeyError:
        return None
    finally:
        repo.close()
    return decode_bytes(value).strip() or None
