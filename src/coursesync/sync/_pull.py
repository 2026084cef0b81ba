"""Pull Operation.

Fetches the configured branch, applies the incoming content sub-path changes
to the working tree and advances the local branch to the remote tip.
"""

from structlog.typing import FilteringBoundLogger

from coursesync.config import SyncConfigLoader
from coursesync.exceptions import CourseSyncError, NonFastForwardError
from coursesync.sync._inspector import scope_relative
from coursesync.sync._models import SyncResult
from coursesync.utils._logging import create_null_logger
from coursesync.utils._paths import is_within
from coursesync.vcs import EMPTY_TREE, VersionControlProtocol

ALREADY_UP_TO_DATE = "Already up to date"


class PullOperation:
    """Fast-forward-only pull of the content sub-path.

    The local branch is only ever advanced to a descendant of its current
    commit. Working-tree files are written only inside the content sub-path;
    incoming changes elsewhere update the index alone, so those files show
    up as local differences until the user brings them in with git.

    The pull is refused (reported as non-fast-forward) when:

    - local commits are missing from the remote branch,
    - an incoming change touches a content file with local modifications.
    """

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

    def run(self) -> SyncResult:
        """Pull remote content changes.

        Returns:
            A successful result listing the content files that changed (empty
            when already current), or a failed result describing why the
            pull was refused.
        """
        self._logger.debug("pull_started", remote=self._remote)
        try:
            result = self._pull()
        except CourseSyncError as e:
            self._logger.warning(
                "pull_failed",
                error_kind=e.kind.value,
                error=str(e),
                detail=e.detail,
            )
            return SyncResult.failure(e, f"Pull failed: {e}")

        self._logger.info(
            "pull_completed",
            files_changed=len(result.files_changed),
        )
        return result

    def _pull(self) -> SyncResult:
        config = self._config_loader.load()
        scope = config.content_sub_path
        remote_ref = f"{self._remote}/{config.branch}"

        self._vcs.fetch(self._remote, config.branch)

        remote_tip = self._vcs.rev_parse(remote_ref)
        if remote_tip is None:
            return SyncResult.ok(ALREADY_UP_TO_DATE)

        head = self._vcs.rev_parse("HEAD")
        if head is not None:
            if self._vcs.is_ancestor(remote_tip, head):
                return SyncResult.ok(ALREADY_UP_TO_DATE)
            if not self._vcs.is_ancestor(head, remote_tip):
                msg = (
                    f"Local branch has diverged from {remote_ref}; "
                    "resolve the divergence manually"
                )
                raise NonFastForwardError(msg)

        incoming = self._vcs.diff_name_only(
            [], base=head or EMPTY_TREE, target=remote_tip
        )
        content = sorted(path for path in incoming if is_within(path, scope))
        outside = sorted(path for path in incoming if not is_within(path, scope))

        status = self._vcs.status_porcelain([scope])
        local = {entry.path for entry in status} | {
            entry.orig_path for entry in status if entry.orig_path
        }
        conflicts = sorted(local.intersection(content))
        if conflicts:
            msg = "Incoming changes would overwrite local modifications"
            raise NonFastForwardError(msg, detail=", ".join(conflicts))

        self._vcs.checkout(remote_tip, content)
        self._vcs.checkout(remote_tip, outside, worktree=False)
        self._vcs.update_head(remote_tip)
        if outside:
            self._logger.info("pull_left_outside_paths", paths=outside)

        files_changed = tuple(sorted(scope_relative(content, scope)))
        if not files_changed:
            return SyncResult.ok(ALREADY_UP_TO_DATE)
        count = len(files_changed)
        return SyncResult.ok(f"Pulled {count} file(s) from {remote_ref}", files_changed)
