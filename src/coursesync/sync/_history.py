"""History Reader."""

from datetime import datetime

import pendulum
from structlog.typing import FilteringBoundLogger

from coursesync.exceptions import CourseSyncError, SyncValidationError
from coursesync.sync._models import CommitRecord
from coursesync.utils._logging import create_null_logger
from coursesync.vcs import LogEntry, VersionControlProtocol


def parse_commit_date(value: str) -> datetime:
    """Parse a strict ISO 8601 author date into an aware datetime.

    Raises:
        ValueError: If the value is not a date-time.
    """
    parsed = pendulum.parse(value)
    # pendulum.parse can return DateTime, Date, Time, or Duration
    if not isinstance(parsed, datetime):
        msg = f"Not a date-time: {value!r}"
        raise ValueError(msg)  # noqa: TRY004
    return parsed


class HistoryReader:
    """Reads recent commits touching the content sub-path.

    Each call re-queries the repository. A failed log query yields an empty
    list; a failed per-commit file count degrades that commit's count to 0.
    """

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

    def read(self, scope: str, limit: int) -> list[CommitRecord]:
        """Return up to ``limit`` commits touching ``scope``, most recent first.

        Args:
            scope: Repository-relative content sub-path.
            limit: Maximum number of commits, at least 1.

        Returns:
            Commit records, newest first.

        Raises:
            SyncValidationError: If ``limit`` is not positive.
        """
        if limit < 1:
            msg = f"History limit must be a positive integer, got {limit}"
            raise SyncValidationError(msg, field="limit")

        try:
            entries = self._vcs.log([scope], limit=limit)
        except CourseSyncError as e:
            self._logger.warning(
                "history_query_failed",
                scope=scope,
                error_kind=e.kind.value,
                error=str(e),
            )
            return []

        return [self._record(entry, scope) for entry in entries[:limit]]

    def _record(self, entry: LogEntry, scope: str) -> CommitRecord:
        try:
            count = len(self._vcs.diff_tree_name_only(entry.sha, [scope]))
        except CourseSyncError as e:
            self._logger.warning(
                "history_file_count_failed",
                sha=entry.sha,
                error_kind=e.kind.value,
                error=str(e),
            )
            count = 0

        return CommitRecord(
            sha=entry.sha,
            author=entry.author,
            date=parse_commit_date(entry.date),
            message=entry.message,
            files_changed_count=count,
        )
