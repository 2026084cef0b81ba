"""Unit tests for PullOperation."""

from pathlib import Path

from coursesync.config import SyncConfigLoader
from coursesync.enums import ErrorKind
from coursesync.exceptions import RemoteUnavailableError
from coursesync.sync import ALREADY_UP_TO_DATE, PullOperation
from coursesync.vcs import FakeVersionControl


def _published(vcs: FakeVersionControl) -> FakeVersionControl:
    vcs.write("content/courses/intro.mdx", "# Intro")
    _ = vcs.commit_all("Initial")
    vcs.publish()
    return vcs


class TestPullOperation:
    def test_fast_forwards_remote_content(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        sha = vcs.remote_commit({"content/courses/agile.mdx": "# Agile"}, "Add agile")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.files_changed == ("agile.mdx",)
        assert result.message == "Pulled 1 file(s) from origin/main"
        assert vcs.head == sha
        assert vcs.worktree["content/courses/agile.mdx"] == "# Agile"

    def test_second_pull_is_already_up_to_date(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        _ = vcs.remote_commit({"content/courses/agile.mdx": "# Agile"}, "Add agile")
        pull = PullOperation(vcs, config_loader)
        _ = pull.run()

        result = pull.run()

        assert result.success is True
        assert result.files_changed == ()
        assert result.message == ALREADY_UP_TO_DATE

    def test_missing_remote_branch_is_up_to_date(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.message == ALREADY_UP_TO_DATE

    def test_local_commits_ahead_are_up_to_date(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        vcs.write("content/courses/local.mdx", "local")
        _ = vcs.commit_all("Local only")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.files_changed == ()
        assert "update_head" not in vcs.calls

    def test_pull_into_unborn_branch(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        sha = vcs.remote_commit({"content/courses/a.mdx": "a"}, "Remote root")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.files_changed == ("a.mdx",)
        assert vcs.head == sha

    def test_diverged_history_is_non_fast_forward(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        _ = vcs.remote_commit({"content/courses/remote.mdx": "r"}, "Remote")
        vcs.write("content/courses/local.mdx", "l")
        head = vcs.commit_all("Local")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is False
        assert result.error_kind == ErrorKind.NON_FAST_FORWARD
        assert vcs.head == head

    def test_incoming_change_outside_content_leaves_worktree_alone(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        vcs.write("README.md", "# Local readme")
        _ = vcs.commit_all("Readme")
        vcs.publish()
        sha = vcs.remote_commit(
            {
                "content/courses/agile.mdx": "# Agile",
                "README.md": "# Remote readme",
                "src/app.ts": "code",
            },
            "Mixed change",
        )

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.files_changed == ("agile.mdx",)
        assert vcs.head == sha
        assert vcs.worktree["content/courses/agile.mdx"] == "# Agile"
        assert vcs.worktree["README.md"] == "# Local readme"
        assert "src/app.ts" not in vcs.worktree
        assert vcs.index["src/app.ts"] == "code"

    def test_incoming_change_only_outside_content_advances_head(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        sha = vcs.remote_commit({"src/app.ts": "code"}, "Code only")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.files_changed == ()
        assert result.message == ALREADY_UP_TO_DATE
        assert vcs.head == sha
        assert vcs.status_porcelain(["content/courses"]) == []

    def test_remote_deletion_removes_content_file(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        _ = vcs.remote_commit({"content/courses/intro.mdx": None}, "Remove intro")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert result.files_changed == ("intro.mdx",)
        assert "content/courses/intro.mdx" not in vcs.worktree
        assert "content/courses/intro.mdx" not in vcs.index

    def test_incoming_change_overlapping_local_edit_is_refused(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        _ = vcs.remote_commit({"content/courses/intro.mdx": "# Remote"}, "Edit")
        vcs.write("content/courses/intro.mdx", "# Local")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is False
        assert result.error_kind == ErrorKind.NON_FAST_FORWARD
        assert vcs.worktree["content/courses/intro.mdx"] == "# Local"

    def test_unrelated_local_edit_survives_pull(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        _ = _published(vcs)
        _ = vcs.remote_commit({"content/courses/agile.mdx": "# Agile"}, "Add agile")
        vcs.write("content/courses/intro.mdx", "# Local")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is True
        assert vcs.worktree["content/courses/intro.mdx"] == "# Local"

    def test_remote_unavailable(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.fail_on["fetch"] = RemoteUnavailableError("offline")

        result = PullOperation(vcs, config_loader).run()

        assert result.success is False
        assert result.error_kind == ErrorKind.REMOTE_UNAVAILABLE
        assert result.retryable is True
        assert result.message.startswith("Pull failed:")

    def test_missing_configuration(
        self, vcs: FakeVersionControl, tmp_path: Path
    ) -> None:
        loader = SyncConfigLoader(tmp_path / "missing.json")

        result = PullOperation(vcs, loader).run()

        assert result.success is False
        assert result.error_kind == ErrorKind.CONFIGURATION_MISSING
        assert vcs.calls == []

    def test_uninitialized_repository(
        self, config_loader: SyncConfigLoader
    ) -> None:
        vcs = FakeVersionControl(initialized=False)

        result = PullOperation(vcs, config_loader).run()

        assert result.success is False
        assert result.error_kind == ErrorKind.REPOSITORY_UNINITIALIZED
