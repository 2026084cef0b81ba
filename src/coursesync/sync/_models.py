"""Sync data models.

This module defines the value objects produced by the sync engine. None of
them is persisted; each is recomputed from repository state on demand.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Self

from coursesync.config import SyncConfig
from coursesync.enums import ErrorKind
from coursesync.exceptions import CourseSyncError


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Classification of local content changes.

    Paths are relative to the content sub-path. The three sets are pairwise
    disjoint.

    Attributes:
        staged: Paths marked for the next commit.
        unstaged: Tracked paths modified since the index was last updated.
        untracked: Paths never committed and not staged.
    """

    staged: frozenset[str] = field(default_factory=frozenset)
    unstaged: frozenset[str] = field(default_factory=frozenset)
    untracked: frozenset[str] = field(default_factory=frozenset)

    @property
    def total_changes(self) -> int:
        """Number of changed paths across all three categories."""
        return len(self.staged) + len(self.unstaged) + len(self.untracked)

    @property
    def is_empty(self) -> bool:
        """True when there are no local content changes."""
        return self.total_changes == 0


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Outcome of a sync, file or configuration operation.

    Attributes:
        success: Whether the operation succeeded.
        message: Human-readable summary.
        files_changed: Relative paths affected, empty when nothing changed.
        commit_hash: Hash of the commit a successful push created.
        error_detail: Diagnostic text, only set when ``success`` is False.
        error_kind: Failure classification, only set when ``success`` is False.
    """

    success: bool
    message: str
    files_changed: tuple[str, ...] = ()
    commit_hash: str | None = None
    error_detail: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def ok(
        cls,
        message: str,
        files_changed: tuple[str, ...] = (),
        *,
        commit_hash: str | None = None,
    ) -> Self:
        """Build a successful result."""
        return cls(
            success=True,
            message=message,
            files_changed=files_changed,
            commit_hash=commit_hash,
        )

    @classmethod
    def failure(cls, error: CourseSyncError, message: str | None = None) -> Self:
        """Build a failed result from a classified error.

        Args:
            error: The error that ended the operation.
            message: Summary to show instead of the error's own message.

        Returns:
            A failed result carrying the error's kind and detail.
        """
        return cls(
            success=False,
            message=message or str(error),
            error_detail=error.detail or str(error),
            error_kind=error.kind,
        )

    @property
    def retryable(self) -> bool:
        """Whether the failure is expected to clear on retry."""
        return self.error_kind in {
            ErrorKind.REMOTE_UNAVAILABLE,
            ErrorKind.INDEX_LOCKED,
            ErrorKind.TIMEOUT,
        }


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """One commit touching the content sub-path.

    Attributes:
        sha: Full commit hash.
        author: Author name.
        date: Author date.
        message: Commit subject line.
        files_changed_count: Number of content files the commit changed.
    """

    sha: str
    author: str
    date: datetime
    message: str
    files_changed_count: int


@dataclass(frozen=True, slots=True)
class FileStatus:
    """A content file together with its change state.

    Attributes:
        relative_path: Path relative to the content root.
        has_changes: Whether the file is staged or has unstaged changes.
        is_new: Whether the file is untracked.
    """

    relative_path: str
    has_changes: bool
    is_new: bool


@dataclass(frozen=True, slots=True)
class FileLinks:
    """Human-facing links for a content file.

    Attributes:
        edit_url: Link to edit the file.
        view_url: Link to view the file.
    """

    edit_url: str
    view_url: str


@dataclass(frozen=True, slots=True)
class SyncStatus:
    """Configuration and repository status.

    Attributes:
        config: Loaded sync configuration, None when missing.
        initialized: Whether version-control metadata is present.
        branch: Checked-out local branch.
        remote_url: URL of the configured remote.
        remote_branch: ``<remote>/<branch>`` when a configuration is loaded.
        config_error: Reason the configuration could not be loaded.
    """

    config: SyncConfig | None
    initialized: bool
    branch: str | None = None
    remote_url: str | None = None
    remote_branch: str | None = None
    config_error: str | None = None
