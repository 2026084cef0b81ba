"""Content path rules.

Content files are addressed by slash-separated paths relative to the content
root. Every path that reaches the store or the sync engine passes through
``normalize_content_path`` first.
"""

import posixpath
from typing import Final

from coursesync.exceptions import SyncValidationError
from coursesync.utils._paths import normalize_relative_path

CONTENT_EXTENSIONS: Final = frozenset({".md", ".mdx"})
DEFAULT_EXTENSION: Final = ".mdx"
INDEX_FILE: Final = "index.mdx"


def is_content_file(path: str) -> bool:
    """Check whether ``path`` carries a recognized content extension."""
    return posixpath.splitext(path)[1].lower() in CONTENT_EXTENSIONS


def normalize_content_path(raw: str) -> str:
    """Normalize a caller-supplied content path.

    A path without an extension is given ``.mdx``.

    Args:
        raw: Path relative to the content root.

    Returns:
        The normalized path, ending in a recognized content extension.

    Raises:
        SyncValidationError: If the path is empty, absolute, escapes the
            content root or has an unrecognized extension.
    """
    normalized = normalize_relative_path(raw)
    if normalized is None:
        msg = f"Invalid content path: {raw!r}"
        raise SyncValidationError(msg, field="relative_path")

    extension = posixpath.splitext(normalized)[1]
    if not extension:
        return normalized + DEFAULT_EXTENSION
    if extension.lower() not in CONTENT_EXTENSIONS:
        allowed = ", ".join(sorted(CONTENT_EXTENSIONS))
        msg = f"Unsupported content extension {extension!r} (expected one of {allowed})"
        raise SyncValidationError(msg, field="relative_path")
    return normalized
