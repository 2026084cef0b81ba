"""Version-control protocol for type-safe dependency injection.

This module defines the narrow set of version-control operations the sync
engine relies on. The git CLI adapter and the in-memory fake both satisfy
it, so the orchestration code can be tested without a real repository.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from coursesync.vcs._models import LogEntry, StatusEntry


@runtime_checkable
class VersionControlProtocol(Protocol):
    """Protocol for the version-control collaborator.

    All paths, both accepted and returned, are repository-relative and
    slash-separated. A ``paths`` argument acts as a pathspec: an empty
    sequence addresses the whole repository.

    Every method may raise a ``CourseSyncError`` subclass describing why the
    underlying operation failed (for example ``IndexLockedError`` or
    ``RemoteUnavailableError``).
    """

    def fetch(self, remote: str, branch: str) -> None:
        """Update the remote-tracking ref for ``branch`` without touching the tree.

        Args:
            remote: Remote name.
            branch: Branch name on the remote.
        """
        ...

    def diff_name_only(
        self,
        paths: Sequence[str],
        *,
        cached: bool = False,
        base: str | None = None,
        target: str | None = None,
    ) -> list[str]:
        """List paths that differ between two states.

        Without ``base``/``target`` the working tree is compared to the index
        (or, with ``cached=True``, the index to HEAD). With both set, the two
        commits (or trees) are compared.

        Args:
            paths: Pathspec restricting the comparison.
            cached: Compare the index to HEAD.
            base: Left-hand commit or tree.
            target: Right-hand commit or tree.

        Returns:
            Changed paths.
        """
        ...

    def status_porcelain(self, paths: Sequence[str]) -> list[StatusEntry]:
        """Report the status of every changed or untracked path.

        Args:
            paths: Pathspec restricting the report.

        Returns:
            One StatusEntry per path, ignored files excluded.
        """
        ...

    def ls_files_others(self, paths: Sequence[str]) -> list[str]:
        """List untracked, non-ignored files.

        Args:
            paths: Pathspec restricting the listing.

        Returns:
            Untracked paths.
        """
        ...

    def add(self, paths: Sequence[str]) -> None:
        """Stage additions, modifications and deletions under ``paths``.

        Args:
            paths: Pathspec to stage.
        """
        ...

    def commit(self, message: str, paths: Sequence[str]) -> None:
        """Record a commit containing only changes under ``paths``.

        Args:
            message: Commit message.
            paths: Pathspec limiting the commit.
        """
        ...

    def push(self, remote: str, branch: str) -> None:
        """Publish the local HEAD to ``branch`` on ``remote``.

        Args:
            remote: Remote name.
            branch: Destination branch.
        """
        ...

    def log(
        self,
        paths: Sequence[str],
        *,
        limit: int | None = None,
        exclude: str | None = None,
    ) -> list[LogEntry]:
        """List commits reachable from HEAD that touch ``paths``.

        Args:
            paths: Pathspec the commits must touch.
            limit: Maximum number of entries.
            exclude: Ref whose ancestors are omitted.

        Returns:
            Entries, most recent first.
        """
        ...

    def diff_tree_name_only(self, sha: str, paths: Sequence[str]) -> list[str]:
        """List the paths a single commit changed.

        Args:
            sha: Commit to inspect.
            paths: Pathspec restricting the listing.

        Returns:
            Changed paths.
        """
        ...

    def rev_parse(self, ref: str) -> str | None:
        """Resolve ``ref`` to a commit hash.

        Args:
            ref: Ref name or revision expression.

        Returns:
            The commit hash, or None if the ref does not exist.
        """
        ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Check whether ``ancestor`` is reachable from ``descendant``.

        A commit is its own ancestor.
        """
        ...

    def checkout(
        self, ref: str, paths: Sequence[str], *, worktree: bool = True
    ) -> None:
        """Make the index (and the working tree) match ``ref`` for ``paths``.

        Paths present in ``ref`` are written; paths absent from it are
        removed. HEAD is not moved.

        Args:
            ref: Commit to take contents from.
            paths: Pathspec to restore. Nothing happens when empty.
            worktree: Also update the working tree, not only the index.
        """
        ...

    def update_head(self, ref: str) -> None:
        """Point the current branch at ``ref`` without touching the index or tree."""
        ...
