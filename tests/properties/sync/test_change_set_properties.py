"""Property-based tests for change-set classification."""

from hypothesis import given, strategies as st

from coursesync.sync import RepositoryInspector
from coursesync.vcs import FakeVersionControl

SCOPE = "content/courses"

names = st.sampled_from(["a.mdx", "b.mdx", "unit-1/c.md", "unit-1/d.mdx"])
repo_path = st.one_of(
    names.map(lambda name: f"{SCOPE}/{name}"),
    st.sampled_from(["README.md", "content/config.json", "content/courses-old/a.mdx"]),
)

operation = st.one_of(
    st.tuples(st.just("write"), repo_path, st.sampled_from(["x", "y", "z"])),
    st.tuples(st.just("delete"), repo_path, st.just("")),
    st.tuples(st.just("add"), repo_path, st.just("")),
    st.tuples(st.just("commit"), st.just(""), st.just("")),
)


def _apply(vcs: FakeVersionControl, operations: list[tuple[str, str, str]]) -> None:
    for name, path, content in operations:
        match name:
            case "write":
                vcs.write(path, content)
            case "delete":
                vcs.delete(path)
            case "add":
                vcs.add([path])
            case _:
                _ = vcs.commit_all("Checkpoint")


@given(operations=st.lists(operation, max_size=25))
def test_change_set_categories_are_disjoint(
    operations: list[tuple[str, str, str]],
) -> None:
    vcs = FakeVersionControl()
    _apply(vcs, operations)

    change_set = RepositoryInspector(vcs).classify(SCOPE)

    assert not change_set.staged & change_set.unstaged
    assert not change_set.staged & change_set.untracked
    assert not change_set.unstaged & change_set.untracked
    union = change_set.staged | change_set.unstaged | change_set.untracked
    assert change_set.total_changes == len(union)


@given(operations=st.lists(operation, max_size=25))
def test_change_set_paths_are_scope_relative(
    operations: list[tuple[str, str, str]],
) -> None:
    vcs = FakeVersionControl()
    _apply(vcs, operations)

    change_set = RepositoryInspector(vcs).classify(SCOPE)

    union = change_set.staged | change_set.unstaged | change_set.untracked
    assert union <= {"a.mdx", "b.mdx", "unit-1/c.md", "unit-1/d.mdx"}


@given(operations=st.lists(operation, max_size=25))
def test_commit_all_clears_the_change_set(
    operations: list[tuple[str, str, str]],
) -> None:
    vcs = FakeVersionControl()
    _apply(vcs, operations)
    _ = vcs.commit_all("Everything")

    assert RepositoryInspector(vcs).classify(SCOPE).is_empty
