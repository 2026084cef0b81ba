"""Default content for newly created files."""

import posixpath


def title_from_path(relative_path: str) -> str:
    """Derive a display title from a content path's file stem."""
    stem = posixpath.splitext(posixpath.basename(relative_path))[0]
    return stem.replace("-", " ").strip() or "Untitled"


def scaffold_content(relative_path: str) -> str:
    """Build the front-matter skeleton used when no content is supplied.

    Args:
        relative_path: Path of the file being created.

    Returns:
        Markdown text with front matter and a top-level heading.
    """
    title = title_from_path(relative_path)
    return (
        "---\n"
        f"title: {title}\n"
        "description:\n"
        "level: Beginner\n"
        "duration: 30 minutes\n"
        "category:\n"
        "tags: []\n"
        "---\n"
        "\n"
        f"# {title}\n"
        "\n"
        "Your content here...\n"
    )
