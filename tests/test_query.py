"""Tests for the content query step."""

from pathlib import Path

from minimalblog.config import BlogOptions
from minimalblog.query import QueryResult, TagGroup, group_tags, run_query

from .conftest import write


class TestRunQuery:
    """Tests for run_query."""

    def test__posts_newest_first(self, site_dir: Path, options: BlogOptions) -> None:
        result = run_query(site_dir, options)

        assert result.errors == []
        assert [post["slug"] for post in result.posts] == ["/second", "/hello-world"]

    def test__pages(self, site_dir: Path, options: BlogOptions) -> None:
        result = run_query(site_dir, options)

        assert [page["slug"] for page in result.pages] == ["about"]

    def test__tag_groups_sorted_with_counts(self, site_dir: Path, options: BlogOptions) -> None:
        result = run_query(site_dir, options)

        assert result.tag_groups == [TagGroup("Python", 2), TagGroup("Static Sites", 1)]

    def test__empty_site(self, tmp_path: Path, options: BlogOptions) -> None:
        result = run_query(tmp_path, options)

        assert result.errors == []
        assert result.posts == []
        assert result.pages == []
        assert result.tag_groups == []

    def test__custom_content_paths(self, tmp_path: Path) -> None:
        """Read posts from the configured posts directory."""
        write(tmp_path / "writing/a.md", "---\ntitle: A\ndate: 2020-01-01\n---\nA\n")

        result = run_query(tmp_path, BlogOptions(posts_path="writing"))

        assert [post["slug"] for post in result.posts] == ["/a"]

    def test__post_without_body(self, tmp_path: Path, options: BlogOptions) -> None:
        """Resolve a post that has front matter and no body."""
        write(tmp_path / "content/posts/stub.md", "---\ntitle: Stub\ndate: 2021-01-01\n---\n")

        result = run_query(tmp_path, options)

        assert result.errors == []
        assert result.posts[0]["slug"] == "/stub"
        assert result.posts[0]["excerpt"] == ""
        assert result.posts[0]["timeToRead"] == 1

    def test__page_without_body(self, tmp_path: Path, options: BlogOptions) -> None:
        write(tmp_path / "content/pages/now.md", "---\ntitle: Now\nslug: now\n---\n")

        result = run_query(tmp_path, options)

        assert result.errors == []
        assert [page["slug"] for page in result.pages] == ["now"]
        assert result.pages[0]["body"] == ""

    def test__posts_sorted_by_utc_instant(self, tmp_path: Path, options: BlogOptions) -> None:
        """Order offset-bearing dates by the moment they denote."""
        write(tmp_path / "content/posts/a.md", "---\ntitle: A\ndate: '2021-01-01T10:00:00+05:00'\n---\nA\n")
        write(tmp_path / "content/posts/b.md", "---\ntitle: B\ndate: '2021-01-01T08:00:00+00:00'\n---\nB\n")

        result = run_query(tmp_path, options)

        assert [post["slug"] for post in result.posts] == ["/b", "/a"]

    def test__errors_drop_all_data(self, site_dir: Path, options: BlogOptions) -> None:
        """Collect every broken file and return no data."""
        write(site_dir / "content/posts/broken.md", "---\ntitle: [oops\n---\n")
        write(site_dir / "content/posts/undated.md", "---\ntitle: Undated\n---\n")

        result = run_query(site_dir, options)

        assert len(result.errors) == 2
        assert any("content/posts/broken.md" in error for error in result.errors)
        assert any("MdxPost.date" in error for error in result.errors)
        assert result.data == {}


class TestGroupTags:
    """Tests for group_tags."""

    def test__counts_each_post(self) -> None:
        posts = [
            {"tags": [{"name": "b"}, {"name": "a"}]},
            {"tags": [{"name": "b"}]},
            {"tags": None},
        ]

        assert group_tags(posts) == [TagGroup("a", 1), TagGroup("b", 2)]

    def test__result_defaults(self) -> None:
        result = QueryResult()

        assert result.posts == []
        assert result.errors == []
