"""Repository Inspector.

Classifies every changed content file as staged, unstaged or untracked
using three independent version-control queries. The inspector never
mutates the repository and never raises: a failed query contributes an
empty set and the remaining queries still run.
"""

from collections.abc import Callable, Iterable

from structlog.typing import FilteringBoundLogger

from coursesync.exceptions import CourseSyncError
from coursesync.sync._models import ChangeSet
from coursesync.utils._logging import create_null_logger
from coursesync.utils._paths import relative_to_scope
from coursesync.vcs import VersionControlProtocol


def scope_relative(paths: Iterable[str], scope: str) -> frozenset[str]:
    """Express repository-relative paths relative to ``scope``.

    Paths outside the scope are dropped.
    """
    relative = (relative_to_scope(path, scope) for path in paths)
    return frozenset(path for path in relative if path)


class RepositoryInspector:
    """Read-only change classification for one content sub-path."""

    __slots__: tuple[str, ...] = ("_logger", "_vcs")

    _vcs: VersionControlProtocol
    _logger: FilteringBoundLogger

    def __init__(
        self,
        vcs: VersionControlProtocol,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._vcs = vcs
        self._logger = logger or create_null_logger()

    def classify(self, scope: str) -> ChangeSet:
        """Classify local changes under ``scope``.

        A path that is staged and modified again afterwards is reported as
        staged only.

        Args:
            scope: Repository-relative content sub-path.

        Returns:
            ChangeSet with paths relative to ``scope``.
        """
        pathspec = [scope]
        staged = self._query(
            "staged", scope, lambda: self._vcs.diff_name_only(pathspec, cached=True)
        )
        unstaged = self._query(
            "unstaged", scope, lambda: self._vcs.diff_name_only(pathspec)
        )
        untracked = self._query(
            "untracked", scope, lambda: self._vcs.ls_files_others(pathspec)
        )

        unstaged -= staged
        untracked -= staged | unstaged

        change_set = ChangeSet(staged=staged, unstaged=unstaged, untracked=untracked)
        self._logger.debug(
            "changeset_classified",
            scope=scope,
            staged=len(staged),
            unstaged=len(unstaged),
            untracked=len(untracked),
        )
        return change_set

    def _query(
        self, name: str, scope: str, query: Callable[[], list[str]]
    ) -> frozenset[str]:
        try:
            return scope_relative(query(), scope)
        except CourseSyncError as e:
            self._logger.warning(
                "changeset_query_failed",
                query=name,
                scope=scope,
                error_kind=e.kind.value,
                error=str(e),
            )
            return frozenset()
