"""Unit tests for PushOperation."""

import pytest

from coursesync.config import SyncConfigLoader
from coursesync.enums import ErrorKind
from coursesync.exceptions import (
    IndexLockedError,
    RemoteUnavailableError,
    SyncValidationError,
)
from coursesync.sync import NOTHING_TO_PUSH, PushOperation, validate_commit_message
from coursesync.vcs import FakeVersionControl


class TestValidateCommitMessage:
    def test_strips_whitespace(self) -> None:
        assert validate_commit_message("  Add intro \n") == "Add intro"

    @pytest.mark.parametrize("message", [None, "", "   ", "\n\t"])
    def test_rejects_blank_messages(self, message: str | None) -> None:
        with pytest.raises(SyncValidationError) as exc_info:
            _ = validate_commit_message(message)

        assert exc_info.value.field == "commit_message"


class TestPushOperation:
    def test_commits_and_pushes_untracked_file(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")

        result = PushOperation(vcs, config_loader).run("Add intro lesson")

        assert result.success is True
        assert result.files_changed == ("intro.mdx",)
        assert result.commit_hash is not None
        assert result.commit_hash == vcs.head == vcs.remote_head
        assert result.message == "Pushed 1 file(s) to origin/main"
        assert vcs.commits[result.commit_hash].message == "Add intro lesson"

    def test_blank_message_never_touches_repository(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")

        result = PushOperation(vcs, config_loader).run("   ")

        assert result.success is False
        assert result.error_kind == ErrorKind.VALIDATION
        assert vcs.calls == []

    def test_clean_tree_reports_nothing_to_push(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        _ = vcs.commit_all("Initial")
        vcs.publish()

        result = PushOperation(vcs, config_loader).run("Nothing")

        assert result.success is True
        assert result.message == NOTHING_TO_PUSH
        assert result.files_changed == ()
        assert result.commit_hash is None
        assert "commit" not in vcs.calls

    def test_empty_repository_reports_nothing_to_push(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        result = PushOperation(vcs, config_loader).run("Nothing")

        assert result.success is True
        assert result.message == NOTHING_TO_PUSH

    def test_changes_outside_content_are_not_committed(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        vcs.write("README.md", "readme")
        vcs.add(["README.md"])

        result = PushOperation(vcs, config_loader).run("Add intro")

        assert result.success is True
        assert result.commit_hash is not None
        assert set(vcs.commits[result.commit_hash].tree) == {
            "content/courses/intro.mdx"
        }
        assert vcs.diff_name_only([], cached=True) == ["README.md"]

    def test_deleted_file_is_reported(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/old.mdx", "old")
        _ = vcs.commit_all("Initial")
        vcs.publish()
        vcs.delete("content/courses/old.mdx")

        result = PushOperation(vcs, config_loader).run("Remove old lesson")

        assert result.success is True
        assert result.files_changed == ("old.mdx",)
        assert vcs.remote_head is not None
        assert "content/courses/old.mdx" not in vcs.commits[vcs.remote_head].tree

    def test_push_failure_after_commit_keeps_local_commit(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        vcs.fail_on["push"] = RemoteUnavailableError("offline")

        result = PushOperation(vcs, config_loader).run("Add intro")

        assert result.success is False
        assert result.error_kind == ErrorKind.REMOTE_UNAVAILABLE
        assert result.commit_hash is None
        assert result.files_changed == ("intro.mdx",)
        assert vcs.head is not None
        assert result.error_detail is not None
        assert vcs.head[:12] in result.error_detail
        assert vcs.remote_head is None

    def test_retry_pushes_pending_commit_without_new_commit(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        vcs.fail_on["push"] = RemoteUnavailableError("offline")
        push = PushOperation(vcs, config_loader)
        _ = push.run("Add intro")
        pending = vcs.head
        del vcs.fail_on["push"]

        result = push.run("Retry")

        assert result.success is True
        assert result.commit_hash is None
        assert result.files_changed == ("intro.mdx",)
        assert result.message == "Pushed 1 pending commit(s) to origin/main"
        assert vcs.head == pending
        assert vcs.remote_head == pending

    def test_index_locked_fails_before_commit(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        vcs.locked = True

        result = PushOperation(vcs, config_loader).run("Add intro")

        assert result.success is False
        assert result.error_kind == ErrorKind.INDEX_LOCKED
        assert result.retryable is True
        assert vcs.head is None

    def test_rejected_push_is_non_fast_forward(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        _ = vcs.commit_all("Initial")
        vcs.publish()
        _ = vcs.remote_commit({"content/courses/remote.mdx": "r"}, "Remote")
        vcs.write("content/courses/local.mdx", "l")

        result = PushOperation(vcs, config_loader).run("Local")

        assert result.success is False
        assert result.error_kind == ErrorKind.NON_FAST_FORWARD


class TestPushOperationErrors:
    def test_index_locked_error_is_classified(
        self, vcs: FakeVersionControl, config_loader: SyncConfigLoader
    ) -> None:
        vcs.write("content/courses/intro.mdx", "# Intro")
        vcs.fail_on["commit"] = IndexLockedError("index.lock exists")

        result = PushOperation(vcs, config_loader).run("Add intro")

        assert result.error_kind == ErrorKind.INDEX_LOCKED
        assert "push" not in vcs.calls
