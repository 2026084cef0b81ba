"""Slash-separated relative path helpers."""

import posixpath


def normalize_relative_path(raw: str) -> str | None:
    """Normalize a user-supplied relative path.

    Backslashes are treated as separators, redundant separators and ``.``
    segments are collapsed and ``..`` segments are resolved lexically.

    Args:
        raw: The path as supplied by the caller.

    Returns:
        The normalized slash-separated path, or None if the path is empty,
        absolute, or escapes its root through ``..``.
    """
    candidate = raw.replace("\\", "/").strip()
    if not candidate or candidate.startswith("/"):
        return None
    normalized = posixpath.normpath(candidate)
    if normalized in {".", ""} or normalized == ".." or normalized.startswith("../"):
        return None
    return normalized


def is_within(path: str, scope: str) -> bool:
    """Check whether a repository-relative path lies inside ``scope``.

    Args:
        path: Slash-separated repository-relative path.
        scope: Slash-separated repository-relative directory.

    Returns:
        True if ``path`` equals ``scope`` or is nested below it.
    """
    scope = scope.strip("/")
    if not scope:
        return True
    return path == scope or path.startswith(f"{scope}/")


def relative_to_scope(path: str, scope: str) -> str | None:
    """Express a repository-relative path relative to ``scope``.

    Args:
        path: Slash-separated repository-relative path.
        scope: Slash-separated repository-relative directory.

    Returns:
        The path below ``scope``, or None if it lies outside.
    """
    scope = scope.strip("/")
    if not scope:
        return path
    if not path.startswith(f"{scope}/"):
        return None
    return path[len(scope) + 1 :]
