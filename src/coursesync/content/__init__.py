"""Content authoring on the working tree."""

from ._models import ContentFile
from ._paths import (
    CONTENT_EXTENSIONS,
    DEFAULT_EXTENSION,
    INDEX_FILE,
    is_content_file,
    normalize_content_path,
)
from ._scaffold import scaffold_content, title_from_path
from ._store import ContentFileStore

__all__ = [
    "CONTENT_EXTENSIONS",
    "DEFAULT_EXTENSION",
    "INDEX_FILE",
    "ContentFile",
    "ContentFileStore",
    "is_content_file",
    "normalize_content_path",
    "scaffold_content",
    "title_from_path",
]
