"""coursesync exceptions."""

from pathlib import Path
from typing import Any, ClassVar

from coursesync.enums import ErrorKind


class CourseSyncError(Exception):
    """Base exception for coursesync errors.

    Attributes:
        kind: Classification reported to callers in a failed SyncResult.
        retryable: Whether repeating the same call may succeed unchanged.
        detail: Optional diagnostic text (typically git's stderr).
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    retryable: ClassVar[bool] = False

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        """Initialize with a message and optional diagnostic detail.

        Args:
            message: Human-readable error message.
            detail: Diagnostic text such as captured stderr.
        """
        super().__init__(message)
        self.detail: str | None = detail


# =============================================================================
# Settings Exceptions
# =============================================================================


class ConfigError(CourseSyncError):
    """Base exception for engine settings errors."""


class ConfigLoadError(ConfigError):
    """Raised when a settings file cannot be loaded or parsed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and the file that failed to load."""
        super().__init__(message)
        self.path: Path | None = path


class ConfigValidationError(ConfigError):
    """Raised when settings fail validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected


# =============================================================================
# Sync Exceptions
# =============================================================================


class ConfigurationMissingError(CourseSyncError):
    """The sync configuration artifact is absent or malformed.

    Attributes:
        path: Location the artifact was expected at.
    """

    kind = ErrorKind.CONFIGURATION_MISSING

    def __init__(
        self, message: str, *, path: Path | None = None, detail: str | None = None
    ) -> None:
        """Initialize with error message and artifact location."""
        super().__init__(message, detail=detail)
        self.path: Path | None = path


class RepositoryUninitializedError(CourseSyncError):
    """No version-control metadata is present at the project root."""

    kind = ErrorKind.REPOSITORY_UNINITIALIZED


class RemoteUnavailableError(CourseSyncError):
    """The remote could not be reached (network or authentication failure)."""

    kind = ErrorKind.REMOTE_UNAVAILABLE
    retryable = True


class NonFastForwardError(CourseSyncError):
    """Local and remote history have diverged and need manual resolution."""

    kind = ErrorKind.NON_FAST_FORWARD


class IndexLockedError(CourseSyncError):
    """Another process holds the repository index lock."""

    kind = ErrorKind.INDEX_LOCKED
    retryable = True


class GitTimeoutError(CourseSyncError):
    """A git invocation exceeded its timeout.

    Attributes:
        timeout_ms: The timeout that was exceeded, in milliseconds.
    """

    kind = ErrorKind.TIMEOUT
    retryable = True

    def __init__(
        self, message: str, *, timeout_ms: int, detail: str | None = None
    ) -> None:
        """Initialize with error message and the exceeded timeout."""
        super().__init__(message, detail=detail)
        self.timeout_ms: int = timeout_ms


class GitCommandError(CourseSyncError):
    """A git invocation failed for an unclassified reason.

    Attributes:
        args_: The git arguments that were run.
        exit_code: Process exit code, or None if git could not be started.
    """

    kind = ErrorKind.GIT_ERROR

    def __init__(
        self,
        message: str,
        *,
        args: tuple[str, ...] = (),
        exit_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        """Initialize with error message and invocation context."""
        super().__init__(message, detail=detail)
        self.args_: tuple[str, ...] = args
        self.exit_code: int | None = exit_code


class FileSystemError(CourseSyncError):
    """A content file operation failed on the filesystem.

    Attributes:
        path: The path involved in the failed operation.
    """

    kind = ErrorKind.FILESYSTEM

    def __init__(
        self, message: str, *, path: str | None = None, detail: str | None = None
    ) -> None:
        """Initialize with error message and the offending path."""
        super().__init__(message, detail=detail)
        self.path: str | None = path


class ContentFileNotFoundError(FileSystemError):
    """The content file to delete or read does not exist."""

    kind = ErrorKind.NOT_FOUND


class SyncValidationError(CourseSyncError, ValueError):
    """Caller input was rejected before any repository access.

    Attributes:
        field: The input field that failed validation.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, field: str | None = None) -> None:
        """Initialize with error message and the offending field."""
        super().__init__(message)
        self.field: str | None = field
