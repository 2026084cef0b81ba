"""Fake version control for testing.

This module provides a FakeVersionControl class that implements
VersionControlProtocol in memory, for use in tests without requiring an
actual git repository or remote.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from coursesync.exceptions import (
    CourseSyncError,
    GitCommandError,
    IndexLockedError,
    NonFastForwardError,
    RemoteUnavailableError,
    RepositoryUninitializedError,
)
from coursesync.utils._paths import is_within
from coursesync.vcs._models import EMPTY_TREE, LogEntry, StatusEntry

type Tree = dict[str, str]

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class FakeCommit:
    """A commit held by the fake object store.

    Attributes:
        sha: Commit hash.
        message: Commit message.
        author: Author name.
        timestamp: Author date.
        tree: Full snapshot of file contents keyed by path.
        parent: Parent commit hash, None for a root commit.
    """

    sha: str
    message: str
    author: str
    timestamp: datetime
    tree: Mapping[str, str]
    parent: str | None = None


def _matches(path: str, paths: Sequence[str]) -> bool:
    return not paths or any(is_within(path, spec) for spec in paths)


def _changed(left: Mapping[str, str], right: Mapping[str, str]) -> set[str]:
    return {p for p in left.keys() | right.keys() if left.get(p) != right.get(p)}


@dataclass(slots=True)
class FakeVersionControl:
    """In-memory version control for testing.

    Implements VersionControlProtocol over a working tree, an index, a local
    branch, a remote-tracking ref and a remote branch, all held in memory.
    Every call is recorded in ``calls``; ``fail_on`` injects an exception for
    a named operation.

    Example:
        >>> vcs = FakeVersionControl()
        >>> vcs.write("content/courses/intro.mdx", "# Intro")
        >>> vcs.ls_files_others(["content/courses"])
        ['content/courses/intro.mdx']
    """

    remote: str = "origin"
    branch: str = "main"
    author: str = "Test Author"
    worktree: dict[str, str] = field(default_factory=dict)
    index: dict[str, str] = field(default_factory=dict)
    commits: dict[str, FakeCommit] = field(default_factory=dict)
    head: str | None = None
    remote_head: str | None = None
    tracking: str | None = None
    initialized: bool = True
    remote_available: bool = True
    locked: bool = False
    fail_on: dict[str, CourseSyncError] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    _counter: int = 0

    # =========================================================================
    # Test Helpers
    # =========================================================================

    def write(self, path: str, content: str) -> None:
        """Create or modify a working tree file."""
        self.worktree[path] = content

    def delete(self, path: str) -> None:
        """Remove a working tree file."""
        _ = self.worktree.pop(path, None)

    def commit_all(self, message: str) -> str:
        """Stage everything and commit it on the local branch.

        Returns:
            The new commit hash.
        """
        self.index = dict(self.worktree)
        return self._record_commit(message, dict(self.index), self.head)

    def remote_commit(self, changes: Mapping[str, str | None], message: str) -> str:
        """Add a commit to the remote branch only.

        Args:
            changes: Files to write, or None to delete them.
            message: Commit message.

        Returns:
            The new remote commit hash.
        """
        tree = dict(self._tree(self.remote_head))
        for path, content in changes.items():
            if content is None:
                _ = tree.pop(path, None)
            else:
                tree[path] = content
        sha = self._record_commit(message, tree, self.remote_head, move_head=False)
        self.remote_head = sha
        return sha

    def publish(self) -> None:
        """Make the remote branch and tracking ref match the local branch."""
        self.remote_head = self.head
        self.tracking = self.head

    def _record_commit(
        self,
        message: str,
        tree: Tree,
        parent: str | None,
        *,
        move_head: bool = True,
    ) -> str:
        self._counter += 1
        sha = f"{self._counter:040x}"
        self.commits[sha] = FakeCommit(
            sha=sha,
            message=message,
            author=self.author,
            timestamp=_EPOCH + timedelta(minutes=self._counter),
            tree=tree,
            parent=parent,
        )
        if move_head:
            self.head = sha
        return sha

    def _tree(self, sha: str | None) -> Mapping[str, str]:
        if sha is None or sha == EMPTY_TREE:
            return {}
        return self.commits[sha].tree

    def _ancestry(self, sha: str | None) -> Iterator[FakeCommit]:
        while sha is not None:
            commit = self.commits[sha]
            yield commit
            sha = commit.parent

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if not self.initialized:
            msg = f"{operation}: not a git repository"
            raise RepositoryUninitializedError(msg)
        error = self.fail_on.get(operation)
        if error is not None:
            raise error

    def _check_lock(self, operation: str) -> None:
        if self.locked:
            msg = f"{operation}: unable to create index.lock"
            raise IndexLockedError(msg, detail="index.lock: File exists")

    def _check_remote(self, operation: str) -> None:
        if not self.remote_available:
            msg = f"{operation}: could not read from remote repository"
            raise RemoteUnavailableError(msg)

    # =========================================================================
    # VersionControlProtocol Methods
    # =========================================================================

    def fetch(self, remote: str, branch: str) -> None:
        self._check("fetch")
        self._check_remote("fetch")
        self.tracking = self.remote_head

    def diff_name_only(
        self,
        paths: Sequence[str],
        *,
        cached: bool = False,
        base: str | None = None,
        target: str | None = None,
    ) -> list[str]:
        self._check("diff_name_only")
        if base is not None and target is not None:
            changed = _changed(self._tree(base), self._tree(target))
        elif cached:
            changed = _changed(self._tree(self.head), self.index)
        else:
            changed = {
                p for p in self.index if self.worktree.get(p) != self.index[p]
            }
        return sorted(p for p in changed if _matches(p, paths))

    def status_porcelain(self, paths: Sequence[str]) -> list[StatusEntry]:
        self._check("status_porcelain")
        head_tree = self._tree(self.head)
        entries: list[StatusEntry] = []
        for path in sorted(head_tree.keys() | self.index.keys() | self.worktree.keys()):
            if not _matches(path, paths):
                continue
            if path not in self.index and path not in head_tree:
                entries.append(StatusEntry("?", "?", path))
                continue

            if path not in self.index:
                x = "D"
            elif path not in head_tree:
                x = "A"
            elif self.index[path] != head_tree[path]:
                x = "M"
            else:
                x = " "

            if path not in self.index:
                y = " "
            elif path not in self.worktree:
                y = "D"
            elif self.worktree[path] != self.index[path]:
                y = "M"
            else:
                y = " "

            if x != " " or y != " ":
                entries.append(StatusEntry(x, y, path))
            if path not in self.index and path in self.worktree:
                entries.append(StatusEntry("?", "?", path))
        return entries

    def ls_files_others(self, paths: Sequence[str]) -> list[str]:
        self._check("ls_files_others")
        return sorted(
            p for p in self.worktree if p not in self.index and _matches(p, paths)
        )

    def add(self, paths: Sequence[str]) -> None:
        self._check("add")
        self._check_lock("add")
        for path in sorted(self.index.keys() | self.worktree.keys()):
            if not _matches(path, paths):
                continue
            if path in self.worktree:
                self.index[path] = self.worktree[path]
            else:
                del self.index[path]

    def commit(self, message: str, paths: Sequence[str]) -> None:
        self._check("commit")
        self._check_lock("commit")
        tree = dict(self._tree(self.head))
        for path in tree.keys() | self.index.keys():
            if not _matches(path, paths):
                continue
            if path in self.index:
                tree[path] = self.index[path]
            else:
                del tree[path]
        if not _changed(self._tree(self.head), tree):
            msg = "'git commit' exited with code 1"
            raise GitCommandError(
                msg, args=("commit",), exit_code=1, detail="nothing to commit"
            )
        _ = self._record_commit(message, tree, self.head)

    def push(self, remote: str, branch: str) -> None:
        self._check("push")
        self._check_remote("push")
        if self.remote_head is not None and not self.is_ancestor(
            self.remote_head, self.head or ""
        ):
            msg = "'git push' failed"
            raise NonFastForwardError(msg, detail="! [rejected] (non-fast-forward)")
        self.remote_head = self.head
        self.tracking = self.head

    def log(
        self,
        paths: Sequence[str],
        *,
        limit: int | None = None,
        exclude: str | None = None,
    ) -> list[LogEntry]:
        self._check("log")
        if self.head is None:
            msg = "'git log' exited with code 128"
            raise GitCommandError(
                msg, exit_code=128, detail="does not have any commits yet"
            )
        excluded = {c.sha for c in self._ancestry(self._resolve(exclude))}
        entries: list[LogEntry] = []
        for commit in self._ancestry(self.head):
            if commit.sha in excluded:
                continue
            touched = _changed(self._tree(commit.parent), commit.tree)
            if not any(_matches(p, paths) for p in touched):
                continue
            entries.append(
                LogEntry(
                    sha=commit.sha,
                    author=commit.author,
                    date=commit.timestamp.isoformat(),
                    message=commit.message,
                )
            )
            if limit is not None and len(entries) >= limit:
                break
        return entries

    def diff_tree_name_only(self, sha: str, paths: Sequence[str]) -> list[str]:
        self._check("diff_tree_name_only")
        commit = self.commits.get(sha)
        if commit is None:
            msg = f"'git diff-tree' bad object {sha}"
            raise GitCommandError(msg, exit_code=128)
        changed = _changed(self._tree(commit.parent), commit.tree)
        return sorted(p for p in changed if _matches(p, paths))

    def rev_parse(self, ref: str) -> str | None:
        self._check("rev_parse")
        return self._resolve(ref)

    def _resolve(self, ref: str | None) -> str | None:
        if ref is None:
            return None
        if ref == "HEAD":
            return self.head
        if ref == f"{self.remote}/{self.branch}":
            return self.tracking
        return ref if ref in self.commits else None

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        self.calls.append("is_ancestor")
        if descendant not in self.commits:
            return False
        return any(c.sha == ancestor for c in self._ancestry(descendant))

    def checkout(
        self, ref: str, paths: Sequence[str], *, worktree: bool = True
    ) -> None:
        self._check("checkout")
        if not paths:
            return
        self._check_lock("checkout")
        source = self._tree(self._require(ref))
        for path in sorted(source.keys() | self.index.keys()):
            if not _matches(path, paths):
                continue
            if path in source:
                self.index[path] = source[path]
                if worktree:
                    self.worktree[path] = source[path]
            else:
                _ = self.index.pop(path, None)
                if worktree:
                    _ = self.worktree.pop(path, None)

    def update_head(self, ref: str) -> None:
        self._check("update_head")
        self.head = self._require(ref)

    def _require(self, ref: str) -> str:
        target = self._resolve(ref)
        if target is None:
            msg = f"unknown revision {ref}"
            raise GitCommandError(msg, exit_code=128)
        return target
