"""Push Operation.

Stages, commits and pushes the content sub-path only. A commit that was
created before a failed push is left in place; the next push publishes it
without creating another commit.
"""

from structlog.typing import FilteringBoundLogger

from coursesync.config import SyncConfig, SyncConfigLoader
from coursesync.exceptions import CourseSyncError, SyncValidationError
from coursesync.sync._inspector import scope_relative
from coursesync.sync._models import SyncResult
from coursesync.utils._logging import create_null_logger
from coursesync.vcs import VersionControlProtocol

NOTHING_TO_PUSH = "No changes to push"


def validate_commit_message(message: str | None) -> str:
    """Return the stripped commit message.

    Raises:
        SyncValidationError: If the message is missing or blank.
    """
    stripped = (message or "").strip()
    if not stripped:
        msg = "Commit message must not be empty"
        raise SyncValidationError(msg, field="commit_message")
    return stripped


class PushOperation:
    """Commit and publish local content changes."""

    __slots__: tuple[str, ...] = ("_config_loader", "_logger", "_remote", "_vcs")

    _vcs: VersionControlProtocol
    _config_loader: SyncConfigLoader
    _remote: str
    _logger: FilteringBoundLogger

    def __init__(
        self,
        vcs: VersionControlProtocol,
        config_loader: SyncConfigLoader,
        *,
        remote: str = "origin",
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._vcs = vcs
        self._config_loader = config_loader
        self._remote = remote
        self._logger = logger or create_null_logger()

    def run(self, commit_message: str | None) -> SyncResult:
        """Commit content changes with ``commit_message`` and push them.

        The message is validated before the repository is touched.

        Args:
            commit_message: Message for the new commit.

        Returns:
            The outcome. ``commit_hash`` is set only when a new commit was
            created and pushed.
        """
        try:
            message = validate_commit_message(commit_message)
        except SyncValidationError as e:
            self._logger.warning("push_rejected", error=str(e))
            return SyncResult.failure(e)

        self._logger.debug("push_started", remote=self._remote)
        try:
            result = self._push(message)
        except CourseSyncError as e:
            self._logger.warning(
                "push_failed",
                error_kind=e.kind.value,
                error=str(e),
                detail=e.detail,
            )
            return SyncResult.failure(e, f"Push failed: {e}")

        self._logger.info(
            "push_completed",
            files_changed=len(result.files_changed),
            commit_hash=result.commit_hash,
        )
        return result

    def _push(self, message: str) -> SyncResult:
        config = self._config_loader.load()
        scope = config.content_sub_path

        status = self._vcs.status_porcelain([scope])
        if not status:
            return self._push_pending(config)

        changed = scope_relative(
            {entry.path for entry in status}
            | {entry.orig_path for entry in status if entry.orig_path},
            scope,
        )

        self._vcs.add([scope])
        self._vcs.commit(message, [scope])
        commit_hash = self._vcs.rev_parse("HEAD")

        try:
            self._vcs.push(self._remote, config.branch)
        except CourseSyncError as e:
            short = (commit_hash or "")[:12]
            self._logger.warning(
                "push_after_commit_failed",
                commit_hash=commit_hash,
                error_kind=e.kind.value,
            )
            detail = f"Local commit {short} was created but not pushed: {e.detail or e}"
            return SyncResult(
                success=False,
                message=f"Push failed: {e}",
                files_changed=tuple(sorted(changed)),
                error_detail=detail,
                error_kind=e.kind,
            )

        return SyncResult.ok(
            f"Pushed {len(changed)} file(s) to {self._remote}/{config.branch}",
            tuple(sorted(changed)),
            commit_hash=commit_hash,
        )

    def _push_pending(self, config: SyncConfig) -> SyncResult:
        """Publish content commits left behind by an earlier failed push."""
        remote_ref = f"{self._remote}/{config.branch}"
        head = self._vcs.rev_parse("HEAD")
        remote_tip = self._vcs.rev_parse(remote_ref)
        if head is None or head == remote_tip:
            return SyncResult.ok(NOTHING_TO_PUSH)

        scope = config.content_sub_path
        exclude = remote_ref if remote_tip is not None else None
        pending = self._vcs.log([scope], exclude=exclude)
        if not pending:
            return SyncResult.ok(NOTHING_TO_PUSH)

        changed: set[str] = set()
        for entry in pending:
            changed.update(self._vcs.diff_tree_name_only(entry.sha, [scope]))

        self._vcs.push(self._remote, config.branch)
        files_changed = tuple(sorted(scope_relative(changed, scope)))
        return SyncResult.ok(
            f"Pushed {len(pending)} pending commit(s) to {remote_ref}",
            files_changed,
        )
