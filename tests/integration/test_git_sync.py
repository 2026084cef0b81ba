"""Integration tests running the sync engine against real git repositories."""

from collections.abc import Callable
from pathlib import Path

from coursesync.enums import ErrorKind
from coursesync.sync import SyncFacade

CloneFunc = Callable[[str], Path]
FacadeFunc = Callable[[Path], SyncFacade]
GitFunc = Callable[..., str]


class TestPush:
    def test_push_publishes_untracked_file(
        self,
        clone_repo: CloneFunc,
        make_facade: FacadeFunc,
        remote_repo: Path,
        git: GitFunc,
    ) -> None:
        facade = make_facade(clone_repo("alice"))
        _ = facade.save_file("intro", "# Intro")

        assert facade.changes().untracked == {"intro.mdx"}

        result = facade.push("Add intro")

        assert result.success is True
        assert result.files_changed == ("intro.mdx",)
        assert result.commit_hash == git(remote_repo, "rev-parse", "main")
        assert facade.changes().is_empty is True

    def test_push_leaves_files_outside_scope_alone(
        self, clone_repo: CloneFunc, make_facade: FacadeFunc, git: GitFunc
    ) -> None:
        work = clone_repo("alice")
        facade = make_facade(work)
        _ = (work / "README.md").write_text("not course content")
        _ = facade.save_file("intro.mdx", "# Intro")

        result = facade.push("Add intro")

        assert result.success is True
        assert "README.md" in git(work, "status", "--porcelain")

    def test_nothing_to_push(
        self, clone_repo: CloneFunc, make_facade: FacadeFunc
    ) -> None:
        facade = make_facade(clone_repo("alice"))

        result = facade.push("Nothing")

        assert result.success is True
        assert result.files_changed == ()
        assert result.commit_hash is None

    def test_diverged_push_is_rejected(
        self, clone_repo: CloneFunc, make_facade: FacadeFunc
    ) -> None:
        alice = make_facade(clone_repo("alice"))
        bob = make_facade(clone_repo("bob"))
        _ = alice.save_file("a.mdx", "a")
        _ = bob.save_file("b.mdx", "b")
        assert alice.push("Alice").success is True

        result = bob.push("Bob")

        assert result.success is False
        assert result.error_kind == ErrorKind.NON_FAST_FORWARD
        assert result.commit_hash is None
        assert result.error_detail is not None
        assert "was created but not pushed" in result.error_detail


class TestPull:
    def test_pull_fast_forwards_remote_changes(
        self, clone_repo: CloneFunc, make_facade: FacadeFunc
    ) -> None:
        alice_root = clone_repo("alice")
        alice = make_facade(alice_root)
        bob = make_facade(clone_repo("bob"))
        _ = bob.save_file("agile.mdx", "# Agile")
        assert bob.push("Add agile").success is True

        result = alice.pull()

        assert result.success is True
        assert result.files_changed == ("agile.mdx",)
        assert (alice_root / "content" / "courses" / "agile.mdx").read_text() == (
            "# Agile"
        )

        second = alice.pull()

        assert second.success is True
        assert second.files_changed == ()

    def test_pull_applies_only_the_content_path(
        self,
        clone_repo: CloneFunc,
        make_facade: FacadeFunc,
        remote_repo: Path,
        git: GitFunc,
    ) -> None:
        alice_root = clone_repo("alice")
        alice = make_facade(alice_root)
        bob_root = clone_repo("bob")
        (bob_root / "content" / "courses").mkdir(parents=True)
        _ = (bob_root / "content" / "courses" / "agile.mdx").write_text("# Agile")
        _ = (bob_root / "README.md").write_text("# Courses")
        _ = git(bob_root, "add", "-A")
        _ = git(bob_root, "commit", "--quiet", "-m", "Agile and readme")
        _ = git(bob_root, "push", "--quiet", "origin", "main")

        result = alice.pull()

        assert result.success is True
        assert result.files_changed == ("agile.mdx",)
        assert alice.read_file("agile.mdx").content == "# Agile"
        assert not (alice_root / "README.md").exists()
        assert git(alice_root, "rev-parse", "HEAD") == git(
            remote_repo, "rev-parse", "main"
        )
        assert alice.changes().is_empty is True

    def test_pull_refuses_to_overwrite_local_edits(
        self, clone_repo: CloneFunc, make_facade: FacadeFunc
    ) -> None:
        alice = make_facade(clone_repo("alice"))
        bob = make_facade(clone_repo("bob"))
        _ = bob.save_file("agile.mdx", "# Agile from Bob")
        assert bob.push("Add agile").success is True
        _ = alice.save_file("agile.mdx", "# Agile from Alice")

        result = alice.pull()

        assert result.success is False
        assert result.error_kind == ErrorKind.NON_FAST_FORWARD
        assert alice.read_file("agile.mdx").content == "# Agile from Alice"

    def test_sync_pulls_then_pushes(
        self,
        clone_repo: CloneFunc,
        make_facade: FacadeFunc,
        remote_repo: Path,
        git: GitFunc,
    ) -> None:
        alice = make_facade(clone_repo("alice"))
        bob = make_facade(clone_repo("bob"))
        _ = bob.save_file("agile.mdx", "# Agile")
        assert bob.push("Add agile").success is True
        _ = alice.save_file("intro.mdx", "# Intro")

        result = alice.sync("Add intro")

        assert result.success is True
        assert result.files_changed == ("intro.mdx",)
        assert result.commit_hash == git(remote_repo, "rev-parse", "main")


    def test_sync_pushes_after_remote_change_outside_content(
        self,
        clone_repo: CloneFunc,
        make_facade: FacadeFunc,
        remote_repo: Path,
        git: GitFunc,
    ) -> None:
        alice = make_facade(clone_repo("alice"))
        bob_root = clone_repo("bob")
        _ = (bob_root / "src.py").write_text("print()\n")
        _ = git(bob_root, "add", "-A")
        _ = git(bob_root, "commit", "--quiet", "-m", "Code change")
        _ = git(bob_root, "push", "--quiet", "origin", "main")
        _ = alice.save_file("intro.mdx", "# Intro")

        result = alice.sync("Add intro")

        assert result.success is True
        assert result.files_changed == ("intro.mdx",)
        assert result.commit_hash == git(remote_repo, "rev-parse", "main")
        tree = git(remote_repo, "ls-tree", "-r", "--name-only", "main")
        assert "src.py" in tree.splitlines()
        assert "content/courses/intro.mdx" in tree.splitlines()


class TestHistory:
    def test_history_lists_content_commits(
        self, clone_repo: CloneFunc, make_facade: FacadeFunc
    ) -> None:
        facade = make_facade(clone_repo("alice"))
        for n in range(3):
            _ = facade.save_file(f"lesson-{n}.mdx", str(n))
            assert facade.push(f"Lesson {n}").success is True

        records = facade.history(5)

        assert [r.message for r in records] == ["Lesson 2", "Lesson 1", "Lesson 0"]
        assert all(r.files_changed_count == 1 for r in records)
        assert records[0].author == "alice author"
        assert records[0].date.tzinfo is not None

    def test_history_of_uninitialized_root_is_empty(
        self, tmp_path: Path, make_facade: FacadeFunc
    ) -> None:
        root = tmp_path / "plain"
        root.mkdir()

        assert make_facade(root).history(5) == []
