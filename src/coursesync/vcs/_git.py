"""Git CLI adapter.

This module implements VersionControlProtocol by running the ``git``
executable. Every invocation goes through ``run_command`` with an explicit
argument vector (never a shell), captured output and a bounded timeout.
Failures are classified from git's stderr into the coursesync exception
taxonomy.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Final, Self

from structlog.typing import FilteringBoundLogger

from coursesync.config import Settings
from coursesync.exceptions import (
    CourseSyncError,
    GitCommandError,
    GitTimeoutError,
    IndexLockedError,
    NonFastForwardError,
    RemoteUnavailableError,
    RepositoryUninitializedError,
)
from coursesync.utils._exec import CommandConfig, CommandResult, run_command
from coursesync.utils._git import (
    DEFAULT_AUTHOR_EMAIL,
    DEFAULT_AUTHOR_NAME,
    AuthorInfo,
    get_author_info,
)
from coursesync.utils._logging import create_null_logger
from coursesync.vcs._models import LogEntry, StatusEntry

# Environment applied to every invocation: no credential prompts, stable messages.
BASE_ENV: Final[dict[str, str]] = {
    "GIT_TERMINAL_PROMPT": "0",
    "LC_ALL": "C",
}

_FIELD_SEP: Final = "\x1f"
_RECORD_SEP: Final = "\x1e"
_LOG_FORMAT: Final = "%H%x1f%an%x1f%aI%x1f%s%x1e"

# Ordered: the first matching group decides the classification.
_STDERR_PATTERNS: Final[tuple[tuple[type[CourseSyncError], tuple[str, ...]], ...]] = (
    (IndexLockedError, ("index.lock",)),
    (RepositoryUninitializedError, ("not a git repository",)),
    (
        NonFastForwardError,
        (
            "[rejected]",
            "non-fast-forward",
            "not possible to fast-forward",
            "would be overwritten",
            "fetch first",
        ),
    ),
    (
        RemoteUnavailableError,
        (
            "could not read from remote",
            "unable to access",
            "could not resolve host",
            "authentication failed",
            "repository not found",
            "does not appear to be a git repository",
        ),
    ),
)


def classify_git_error(
    args: Sequence[str], result: CommandResult, *, timeout_ms: int = 0
) -> CourseSyncError:
    """Map a failed git invocation to a coursesync exception.

    Args:
        args: The git arguments that were run (without the executable).
        result: The failed command result.
        timeout_ms: Timeout the invocation ran under.

    Returns:
        The exception describing the failure (not raised).
    """
    command = " ".join(["git", *args])
    detail = (result.stderr or result.error or "").strip() or None

    if result.timed_out:
        return GitTimeoutError(
            f"'{command}' timed out",
            timeout_ms=timeout_ms,
            detail=detail,
        )
    if result.command_not_found:
        return GitCommandError(
            f"git executable not found while running '{command}'",
            args=tuple(args),
            detail=detail,
        )

    lowered = (detail or "").lower()
    for error_type, needles in _STDERR_PATTERNS:
        if any(needle in lowered for needle in needles):
            return error_type(f"'{command}' failed", detail=detail)

    return GitCommandError(
        f"'{command}' exited with code {result.exit_code}",
        args=tuple(args),
        exit_code=result.exit_code,
        detail=detail,
    )


def parse_porcelain(output: str) -> list[StatusEntry]:
    """Parse ``git status --porcelain -z`` output.

    Args:
        output: Raw NUL-separated status output.

    Returns:
        Parsed status entries in output order.
    """
    entries: list[StatusEntry] = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        if len(record) < 4:  # noqa: PLR2004
            continue
        index_status, worktree_status, path = record[0], record[1], record[3:]
        orig_path: str | None = None
        if index_status in {"R", "C"} and i < len(fields):
            orig_path = fields[i]
            i += 1
        entries.append(
            StatusEntry(
                index_status=index_status,
                worktree_status=worktree_status,
                path=path,
                orig_path=orig_path,
            )
        )
    return entries


def parse_log(output: str) -> list[LogEntry]:
    """Parse log output produced with the adapter's record format.

    Args:
        output: Raw log output.

    Returns:
        Parsed entries in output order.
    """
    entries: list[LogEntry] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")  # noqa: PLW2901
        if not record:
            continue
        parts = record.split(_FIELD_SEP, 3)
        if len(parts) != 4:  # noqa: PLR2004
            continue
        sha, author, date, message = parts
        entries.append(LogEntry(sha=sha, author=author, date=date, message=message))
    return entries


def _split_nul(output: str) -> list[str]:
    return [name for name in output.split("\0") if name]


class GitCli:
    """Version-control adapter backed by the git executable.

    Attributes:
        root: Working tree root every command runs in.
        executable: Program used to run git.
        timeout_ms: Upper bound for each invocation.
    """

    __slots__: tuple[str, ...] = (
        "_author",
        "_logger",
        "executable",
        "root",
        "timeout_ms",
    )

    root: Path
    executable: str
    timeout_ms: int
    _author: AuthorInfo | None
    _logger: FilteringBoundLogger

    def __init__(
        self,
        root: Path,
        *,
        executable: str = "git",
        timeout_ms: int = 30000,
        author: AuthorInfo | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Create an adapter for the working tree at ``root``.

        Args:
            root: Working tree root.
            executable: Program used to run git.
            timeout_ms: Upper bound for each invocation, in milliseconds.
            author: Commit identity. Resolved from the environment and git
                configuration on first commit when omitted.
            logger: Logger for command tracing.
        """
        self.root = root
        self.executable = executable
        self.timeout_ms = timeout_ms
        self._author = author
        self._logger = logger or create_null_logger()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> Self:
        """Create an adapter configured from engine settings."""
        return cls(
            settings.project_root,
            executable=settings.git_executable,
            timeout_ms=settings.git_timeout_ms,
            logger=logger,
        )

    # =========================================================================
    # Invocation
    # =========================================================================

    def _run(
        self,
        *args: str,
        env: dict[str, str] | None = None,
        allowed_exit_codes: frozenset[int] = frozenset({0}),
    ) -> CommandResult:
        """Run git and raise a classified error unless the exit code is allowed."""
        config = CommandConfig(
            argv=(self.executable, *args),
            cwd=self.root,
            env={**BASE_ENV, **(env or {})},
            timeout_ms=self.timeout_ms,
        )
        self._logger.debug("git_command", args=list(args))
        result = run_command(config)

        if result.success and result.exit_code in allowed_exit_codes:
            return result

        error = classify_git_error(args, result, timeout_ms=self.timeout_ms)
        self._logger.debug(
            "git_command_failed",
            args=list(args),
            exit_code=result.exit_code,
            error_kind=error.kind.value,
        )
        raise error

    def _author_env(self) -> dict[str, str]:
        if self._author is None:
            self._author = get_author_info(self.root)
        name = self._author.name or DEFAULT_AUTHOR_NAME
        email = self._author.email or DEFAULT_AUTHOR_EMAIL
        return {
            "GIT_AUTHOR_NAME": name,
            "GIT_AUTHOR_EMAIL": email,
            "GIT_COMMITTER_NAME": name,
            "GIT_COMMITTER_EMAIL": email,
        }

    # =========================================================================
    # VersionControlProtocol Methods
    # =========================================================================

    def fetch(self, remote: str, branch: str) -> None:
        refspec = f"+refs/heads/{branch}:refs/remotes/{remote}/{branch}"
        _ = self._run("fetch", "--quiet", remote, refspec)

    def diff_name_only(
        self,
        paths: Sequence[str],
        *,
        cached: bool = False,
        base: str | None = None,
        target: str | None = None,
    ) -> list[str]:
        args = ["diff", "--name-only", "-z", "--no-renames"]
        if cached:
            args.append("--cached")
        args.extend(ref for ref in (base, target) if ref is not None)
        result = self._run(*args, "--", *paths)
        return _split_nul(result.stdout)

    def status_porcelain(self, paths: Sequence[str]) -> list[StatusEntry]:
        result = self._run("status", "--porcelain", "-z", "-uall", "--", *paths)
        return parse_porcelain(result.stdout)

    def ls_files_others(self, paths: Sequence[str]) -> list[str]:
        result = self._run(
            "ls-files", "--others", "--exclude-standard", "-z", "--", *paths
        )
        return _split_nul(result.stdout)

    def add(self, paths: Sequence[str]) -> None:
        _ = self._run("add", "-A", "--", *paths)

    def commit(self, message: str, paths: Sequence[str]) -> None:
        _ = self._run(
            "commit", "--quiet", "-m", message, "--", *paths, env=self._author_env()
        )

    def push(self, remote: str, branch: str) -> None:
        _ = self._run("push", "--quiet", remote, f"HEAD:refs/heads/{branch}")

    def log(
        self,
        paths: Sequence[str],
        *,
        limit: int | None = None,
        exclude: str | None = None,
    ) -> list[LogEntry]:
        args = ["log", f"--format={_LOG_FORMAT}"]
        if limit is not None:
            args.append(f"--max-count={limit}")
        args.append("HEAD")
        if exclude is not None:
            args.append(f"^{exclude}")
        result = self._run(*args, "--", *paths)
        return parse_log(result.stdout)

    def diff_tree_name_only(self, sha: str, paths: Sequence[str]) -> list[str]:
        result = self._run(
            "diff-tree",
            "--no-commit-id",
            "--name-only",
            "-r",
            "-z",
            "--root",
            sha,
            "--",
            *paths,
        )
        return _split_nul(result.stdout)

    def rev_parse(self, ref: str) -> str | None:
        result = self._run(
            "rev-parse",
            "--verify",
            "--quiet",
            f"{ref}^{{commit}}",
            allowed_exit_codes=frozenset({0, 1}),
        )
        if result.exit_code != 0:
            return None
        return result.stdout.strip() or None

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        result = self._run(
            "merge-base",
            "--is-ancestor",
            ancestor,
            descendant,
            allowed_exit_codes=frozenset({0, 1}),
        )
        return result.exit_code == 0

    def checkout(
        self, ref: str, paths: Sequence[str], *, worktree: bool = True
    ) -> None:
        if not paths:
            return
        args = ["restore", f"--source={ref}", "--staged"]
        if worktree:
            args.append("--worktree")
        _ = self._run(*args, "--", *paths)

    def update_head(self, ref: str) -> None:
        _ = self._run("update-ref", "-m", "coursesync: pull", "HEAD", ref)
