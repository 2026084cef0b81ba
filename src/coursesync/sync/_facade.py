"""Sync Façade.

Single entry point used by the HTTP API and the CLI. It wires the
inspector, the content store and the pull, push and history operations to
one version-control collaborator, and guarantees that no exception escapes
a result-returning call.
"""

import dataclasses
from collections.abc import Callable
from typing import Self

from structlog.typing import FilteringBoundLogger

from coursesync.config import Settings, SyncConfigLoader
from coursesync.content import ContentFile, ContentFileStore
from coursesync.enums import ErrorKind, SyncAction
from coursesync.exceptions import ConfigurationMissingError, CourseSyncError
from coursesync.sync._history import HistoryReader
from coursesync.sync._inspector import RepositoryInspector
from coursesync.sync._links import build_links
from coursesync.sync._models import (
    ChangeSet,
    CommitRecord,
    FileLinks,
    FileStatus,
    SyncResult,
    SyncStatus,
)
from coursesync.sync._pull import PullOperation
from coursesync.sync._push import PushOperation, validate_commit_message
from coursesync.utils._git import get_repository_info
from coursesync.utils._logging import create_null_logger
from coursesync.vcs import GitCli, VersionControlProtocol


class SyncFacade:
    """Content synchronization engine.

    Result-returning methods (``pull``, ``push``, ``sync``, ``run``,
    ``save_file``, ``delete_file``) never raise: classified errors become
    failed results and anything unexpected becomes a failed result of kind
    ``internal``. Read methods degrade to best-effort answers.

    The working tree is a single shared resource. Concurrent calls are not
    coordinated; callers that need mutual exclusion must serialize calls to
    the façade themselves.

    Example:
        >>> facade = SyncFacade.from_settings(load_settings())
        >>> facade.sync("Add intro lesson").success
        True
    """

    __slots__: tuple[str, ...] = (
        "_config_loader",
        "_history",
        "_inspector",
        "_logger",
        "_pull",
        "_push",
        "_settings",
        "_store",
        "_vcs",
    )

    _settings: Settings
    _vcs: VersionControlProtocol
    _store: ContentFileStore | None
    _config_loader: SyncConfigLoader
    _inspector: RepositoryInspector
    _pull: PullOperation
    _push: PushOperation
    _history: HistoryReader
    _logger: FilteringBoundLogger

    def __init__(
        self,
        settings: Settings,
        vcs: VersionControlProtocol,
        *,
        store: ContentFileStore | None = None,
        config_loader: SyncConfigLoader | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._settings = settings
        self._vcs = vcs
        self._logger = logger or create_null_logger()
        self._store = store
        self._config_loader = config_loader or SyncConfigLoader.from_settings(settings)
        self._inspector = RepositoryInspector(vcs, logger=self._logger)
        self._pull = PullOperation(
            vcs, self._config_loader, remote=settings.remote, logger=self._logger
        )
        self._push = PushOperation(
            vcs, self._config_loader, remote=settings.remote, logger=self._logger
        )
        self._history = HistoryReader(vcs, logger=self._logger)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> Self:
        """Create a façade backed by the git executable."""
        vcs = GitCli.from_settings(settings, logger=logger)
        return cls(settings, vcs, logger=logger)

    @property
    def settings(self) -> Settings:
        """Engine settings."""
        return self._settings

    @property
    def store(self) -> ContentFileStore:
        """The content file store, rooted at the current sync scope."""
        return self._store_at(self.scope())

    def _store_at(self, scope: str) -> ContentFileStore:
        if self._store is not None:
            return self._store
        return ContentFileStore(
            self._settings.project_root / scope, logger=self._logger
        )

    # =========================================================================
    # Reads
    # =========================================================================

    def scope(self) -> str:
        """Repository-relative path all sync operations are confined to.

        Falls back to the configured content directory when the sync
        configuration cannot be loaded.
        """
        config = self._config_loader.load_or_none()
        if config is not None:
            return config.content_sub_path
        return self._settings.content_dir.strip("/")

    def changes(self) -> ChangeSet:
        """Classify local content changes. Never raises."""
        return self._inspector.classify(self.scope())

    def files(self) -> list[FileStatus]:
        """List content files with their change state."""
        scope = self.scope()
        change_set = self._inspector.classify(scope)
        modified = change_set.staged | change_set.unstaged
        return [
            FileStatus(
                relative_path=path,
                has_changes=path in modified,
                is_new=path in change_set.untracked,
            )
            for path in self._store_at(scope).list_all()
        ]

    def status(self) -> SyncStatus:
        """Report configuration and repository status."""
        info = get_repository_info(self._settings.project_root, self._settings.remote)
        try:
            config = self._config_loader.load()
        except ConfigurationMissingError as e:
            return SyncStatus(
                config=None,
                initialized=info.initialized,
                branch=info.branch,
                remote_url=info.remote_url,
                config_error=str(e),
            )
        return SyncStatus(
            config=config,
            initialized=info.initialized,
            branch=info.branch,
            remote_url=info.remote_url,
            remote_branch=f"{self._settings.remote}/{config.branch}",
        )

    def history(self, limit: int | None = None) -> list[CommitRecord]:
        """Return recent commits touching the content sub-path.

        Args:
            limit: Maximum number of commits (defaults to the configured
                history limit).

        Raises:
            SyncValidationError: If ``limit`` is not positive.
        """
        effective = self._settings.history_limit if limit is None else limit
        return self._history.read(self.scope(), effective)

    def read_file(self, relative_path: str) -> ContentFile:
        """Read a content file.

        Raises:
            SyncValidationError: If the path is malformed.
            ContentFileNotFoundError: If the file does not exist.
            FileSystemError: If the file cannot be read.
        """
        return self.store.read(relative_path)

    def links(self, relative_path: str = "") -> FileLinks:
        """Compute edit and view links for a content file.

        Raises:
            ConfigurationMissingError: If the sync configuration is missing.
            SyncValidationError: If the path is malformed.
        """
        return build_links(self._config_loader.load(), relative_path)

    # =========================================================================
    # Operations
    # =========================================================================

    def pull(self) -> SyncResult:
        """Fast-forward content from the remote branch."""
        return self._guard("pull", self._pull.run)

    def push(self, commit_message: str | None) -> SyncResult:
        """Commit and push local content changes."""
        return self._guard("push", lambda: self._push.run(commit_message))

    def sync(self, commit_message: str | None = None) -> SyncResult:
        """Pull, then push when a commit message is given.

        A push is never attempted unless the pull succeeded (including the
        case where there was nothing to pull).

        Args:
            commit_message: Message for the push. When None or empty only the
                pull runs; a message made only of whitespace is rejected.

        Returns:
            The pull result when it failed or no message was given, otherwise
            the push result.
        """
        return self._guard("sync", lambda: self._sync(commit_message))

    def run(self, action: SyncAction, commit_message: str | None = None) -> SyncResult:
        """Dispatch one of the sync actions."""
        match action:
            case SyncAction.PULL:
                return self.pull()
            case SyncAction.PUSH:
                return self.push(commit_message)
            case SyncAction.SYNC:
                return self.sync(commit_message)

    def save_file(self, relative_path: str, content: str | None = None) -> SyncResult:
        """Create or overwrite a content file (scaffolded when ``content`` is None)."""

        def _save() -> SyncResult:
            written = self.store.write(relative_path, content)
            return SyncResult.ok(
                f"Saved {written.relative_path}", (written.relative_path,)
            )

        return self._guard("save_file", _save)

    def delete_file(self, relative_path: str) -> SyncResult:
        """Delete a content file."""

        def _delete() -> SyncResult:
            removed = self.store.delete(relative_path)
            return SyncResult.ok(f"Deleted {removed}", (removed,))

        return self._guard("delete_file", _delete)

    def _sync(self, commit_message: str | None) -> SyncResult:
        if commit_message:
            _ = validate_commit_message(commit_message)

        pulled = self._pull.run()
        if not pulled.success or not commit_message:
            return pulled

        pushed = self._push.run(commit_message)
        message = f"{pulled.message}. {pushed.message}"
        return dataclasses.replace(pushed, message=message)

    def _guard(self, operation: str, call: Callable[[], SyncResult]) -> SyncResult:
        try:
            return call()
        except CourseSyncError as e:
            self._logger.warning(
                "operation_failed",
                operation=operation,
                error_kind=e.kind.value,
                error=str(e),
            )
            return SyncResult.failure(e)
        except Exception as e:
            self._logger.exception("operation_crashed", operation=operation)
            return SyncResult(
                success=False,
                message=f"{operation} failed unexpectedly",
                error_detail=f"{type(e).__name__}: {e}",
                error_kind=ErrorKind.INTERNAL,
            )

