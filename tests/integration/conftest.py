import json
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from coursesync.config import Settings
from coursesync.sync import SyncFacade
from coursesync.vcs import GitCli

CONTENT_PATH = "content/courses"

GIT_IDENTITY = ("-c", "user.name=Test Author", "-c", "user.email=test@example.com")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


def run_git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return its stripped stdout."""
    result = subprocess.run(  # noqa: S603
        ["git", *GIT_IDENTITY, *args],  # noqa: S607
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git() -> Callable[..., str]:
    return run_git


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    """A bare repository whose ``main`` branch holds the sync configuration."""
    remote = tmp_path / "remote.git"
    remote.mkdir()
    _ = run_git(remote, "init", "--quiet", "--bare")
    _ = run_git(remote, "symbolic-ref", "HEAD", "refs/heads/main")

    seed = tmp_path / "seed"
    _ = run_git(tmp_path, "clone", "--quiet", str(remote), str(seed))
    _ = run_git(seed, "checkout", "--quiet", "-b", "main")
    config_path = seed / "content" / "config.json"
    config_path.parent.mkdir(parents=True)
    _ = config_path.write_text(
        json.dumps(
            {
                "git": {
                    "repository": "acme/courses",
                    "branch": "main",
                    "contentPath": CONTENT_PATH,
                    "editUrl": "https://github.com/acme/courses/edit/main",
                }
            }
        )
    )
    _ = run_git(seed, "add", "-A")
    _ = run_git(seed, "commit", "--quiet", "-m", "Add sync configuration")
    _ = run_git(seed, "push", "--quiet", "origin", "main")
    return remote


@pytest.fixture
def clone_repo(tmp_path: Path, remote_repo: Path) -> Callable[[str], Path]:
    """Return a function that clones the remote into a named working tree."""

    def _clone(name: str) -> Path:
        work = tmp_path / name
        _ = run_git(tmp_path, "clone", "--quiet", str(remote_repo), str(work))
        _ = run_git(work, "config", "user.name", f"{name} author")
        _ = run_git(work, "config", "user.email", f"{name}@example.com")
        return work

    return _clone


@pytest.fixture
def make_facade(monkeypatch: pytest.MonkeyPatch) -> Callable[[Path], SyncFacade]:
    """Return a function that builds a git-backed façade for a working tree."""
    monkeypatch.delenv("COURSESYNC_AUTHOR_NAME", raising=False)
    monkeypatch.delenv("COURSESYNC_AUTHOR_EMAIL", raising=False)

    def _make(root: Path) -> SyncFacade:
        settings = Settings(project_root=root)
        return SyncFacade(settings, GitCli.from_settings(settings))

    return _make
