"""Property-based tests for ContentFileStore."""

import tempfile
from pathlib import Path

from hypothesis import given, settings, strategies as st

from coursesync.content import ContentFileStore

segment = st.text(alphabet="abcdefxyz0123456789-_", min_size=1, max_size=8)
content_path = st.builds(
    lambda parts, ext: "/".join(parts) + ext,
    st.lists(segment, min_size=1, max_size=3),
    st.sampled_from([".md", ".mdx", ""]),
)


@given(path=content_path, content=st.text(max_size=200))
@settings(max_examples=50)
def test_read_after_write_returns_content(path: str, content: str) -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        store = ContentFileStore(Path(tmpdir) / "courses")

        written = store.write(path, content)

        assert store.read(path).content == content
        assert list(store.list_all()) == [written.relative_path]


@given(paths=st.lists(content_path, min_size=1, max_size=6))
@settings(max_examples=30)
def test_list_all_is_sorted_and_unique(paths: list[str]) -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        store = ContentFileStore(Path(tmpdir) / "courses")
        written = {store.write(path, path).relative_path for path in paths}

        listed = list(store.list_all())

        assert listed == sorted(written, key=lambda p: p.split("/"))
