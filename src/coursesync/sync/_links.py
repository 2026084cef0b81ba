"""Human-facing edit and view links.

Links are composed by substituting placeholders into the configured URL
templates. No network access is involved.
"""

from typing import Final
from urllib.parse import quote

from coursesync.config import SyncConfig
from coursesync.content import INDEX_FILE, normalize_content_path
from coursesync.sync._models import FileLinks

PLACEHOLDERS: Final = ("{repository}", "{branch}", "{content_path}", "{path}")


def render_link(template: str, config: SyncConfig, relative_path: str) -> str:
    """Render one URL template for a content file.

    A template without any placeholder is treated as a base URL and the
    file path is appended to it.

    Args:
        template: URL template or base URL.
        config: Sync configuration supplying repository, branch and sub-path.
        relative_path: Normalized path relative to the content sub-path.

    Returns:
        The rendered URL.
    """
    path = quote(relative_path, safe="/")
    if not any(placeholder in template for placeholder in PLACEHOLDERS):
        return f"{template.rstrip('/')}/{path}"

    values = {
        "{repository}": config.repository_identifier,
        "{branch}": quote(config.branch, safe="/"),
        "{content_path}": quote(config.content_sub_path, safe="/"),
        "{path}": path,
    }
    rendered = template
    for placeholder, value in values.items():
        rendered = rendered.replace(placeholder, value)
    return rendered


def build_links(config: SyncConfig, relative_path: str = "") -> FileLinks:
    """Compute the edit and view links for a content file.

    An empty path addresses the index file; a path without an extension is
    given ``.mdx``.

    Raises:
        SyncValidationError: If the path is malformed.
    """
    path = INDEX_FILE
    if relative_path.strip():
        path = normalize_content_path(relative_path)
    return FileLinks(
        edit_url=render_link(config.edit_url_template, config, path),
        view_url=render_link(config.view_url_template, config, path),
    )
