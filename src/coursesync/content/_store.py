"""Content File Store.

Creates, reads, updates and deletes individual content files below a single
content root. The store knows nothing about version control; its writes
become visible to the next change-set query.
"""

import tempfile
from collections.abc import Iterator
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from coursesync.content._models import ContentFile
from coursesync.content._paths import is_content_file, normalize_content_path
from coursesync.content._scaffold import scaffold_content
from coursesync.exceptions import ContentFileNotFoundError, FileSystemError
from coursesync.utils._logging import create_null_logger


def _atomic_write(path: Path, content: str) -> None:
    """Write text to a file by renaming a completed temporary file over it.

    Raises:
        OSError: If the directory cannot be created or the write fails.
    """
    _ = path.parent.mkdir(parents=True, exist_ok=True)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
            encoding="utf-8",
            newline="",
        ) as f:
            _ = f.write(content)
            temp_path = Path(f.name)
        _ = temp_path.replace(path)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise


class ContentFileStore:
    """File authoring confined to one content root.

    Attributes:
        root: Absolute content root directory.
    """

    __slots__: tuple[str, ...] = ("_logger", "root")

    root: Path
    _logger: FilteringBoundLogger

    def __init__(
        self, root: Path, *, logger: FilteringBoundLogger | None = None
    ) -> None:
        self.root = root
        self._logger = logger or create_null_logger()

    def resolve(self, relative_path: str) -> tuple[str, Path]:
        """Normalize a content path and locate it on disk.

        Args:
            relative_path: Path relative to the content root.

        Returns:
            Tuple of (normalized relative path, absolute path).

        Raises:
            SyncValidationError: If the path is malformed or escapes the root
                lexically.
            FileSystemError: If the path escapes the root through a symlink.
        """
        normalized = normalize_content_path(relative_path)
        full_path = self.root / normalized
        root = self.root.resolve()
        if not full_path.resolve().is_relative_to(root):
            msg = f"Path resolves outside the content root: {normalized}"
            raise FileSystemError(msg, path=normalized)
        return normalized, full_path

    def write(self, relative_path: str, content: str | None = None) -> ContentFile:
        """Create or overwrite a content file.

        Args:
            relative_path: Path relative to the content root.
            content: Full text payload. Scaffolded content is used when None.

        Returns:
            The written file.

        Raises:
            SyncValidationError: If the path is invalid.
            FileSystemError: If the file cannot be written.
        """
        normalized, full_path = self.resolve(relative_path)
        payload = scaffold_content(normalized) if content is None else content

        try:
            _atomic_write(full_path, payload)
        except OSError as e:
            msg = f"Failed to write {normalized}: {e.strerror or e}"
            raise FileSystemError(msg, path=normalized, detail=str(e)) from e

        self._logger.info(
            "content_file_written",
            relative_path=normalized,
            scaffolded=content is None,
            size=len(payload),
        )
        return ContentFile(relative_path=normalized, content=payload)

    def read(self, relative_path: str) -> ContentFile:
        """Read a content file.

        Raises:
            SyncValidationError: If the path is invalid.
            ContentFileNotFoundError: If the file does not exist.
            FileSystemError: If the file cannot be read.
        """
        normalized, full_path = self.resolve(relative_path)
        if not full_path.is_file():
            msg = f"Content file not found: {normalized}"
            raise ContentFileNotFoundError(msg, path=normalized)
        try:
            with full_path.open(encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read {normalized}: {e}"
            raise FileSystemError(msg, path=normalized, detail=str(e)) from e
        return ContentFile(relative_path=normalized, content=content)

    def delete(self, relative_path: str) -> str:
        """Delete a content file.

        Returns:
            The normalized path that was removed.

        Raises:
            SyncValidationError: If the path is invalid.
            ContentFileNotFoundError: If the file does not exist.
            FileSystemError: If the file cannot be removed.
        """
        normalized, full_path = self.resolve(relative_path)
        if not full_path.is_file():
            msg = f"Content file not found: {normalized}"
            raise ContentFileNotFoundError(msg, path=normalized)
        try:
            full_path.unlink()
        except FileNotFoundError as e:
            msg = f"Content file not found: {normalized}"
            raise ContentFileNotFoundError(msg, path=normalized) from e
        except OSError as e:
            msg = f"Failed to delete {normalized}: {e.strerror or e}"
            raise FileSystemError(msg, path=normalized, detail=str(e)) from e

        self._logger.info("content_file_deleted", relative_path=normalized)
        return normalized

    def list_all(self) -> Iterator[str]:
        """Walk the content root lazily.

        Each call starts a fresh walk. Entries within a directory are visited
        in name order and subdirectories are entered where they sort, so the
        paths come out ordered by their components. Hidden entries and
        symlinked directories are skipped.

        Yields:
            Relative paths of files with a recognized content extension.
        """
        if not self.root.is_dir():
            return
        yield from self._walk(self.root, "")

    def _walk(self, directory: Path, prefix: str) -> Iterator[str]:
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            self._logger.warning(
                "content_walk_failed", directory=str(directory), error=str(e)
            )
            return
        for child in children:
            if child.name.startswith("."):
                continue
            relative = f"{prefix}{child.name}"
            if child.is_dir():
                if not child.is_symlink():
                    yield from self._walk(child, f"{relative}/")
            elif child.is_file() and is_content_file(relative):
                yield relative
