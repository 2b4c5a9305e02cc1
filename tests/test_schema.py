"""Tests for content types and field extensions."""

import datetime as dt

import pytest
from minimalblog.config import BlogOptions
from minimalblog.content import PageNode, PostNode, PostTag
from minimalblog.render import prune_text, time_to_read
from minimalblog.schema import (
    FIELD_EXTENSIONS,
    PAGE_TYPE,
    POST_TYPE,
    SchemaError,
    field_extension,
    format_date,
    resolve_node,
)


def make_post(**overrides: object) -> PostNode:
    values = {
        "source": "posts/hello.md",
        "title": "Hello World",
        "slug": "",
        "date": dt.date(2021, 1, 2),
        "body": "Hello *world*.",
        "tags": (PostTag.from_name("Static Sites"),),
    }
    values.update(overrides)
    return PostNode(**values)


class TestFormatDate:
    """Tests for format_date."""

    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [
            ("DD.MM.YYYY", "05.03.2020"),
            ("MMMM D, YYYY", "March 5, 2020"),
            ("ddd, MMM D YY", "Thu, Mar 5 20"),
            ("[Day] D", "Day 5"),
            ("YYYY-MM-DD HH:mm", "2020-03-05 00:00"),
        ],
    )
    def test__tokens(self, fmt: str, expected: str) -> None:
        assert format_date(dt.date(2020, 3, 5), fmt) == expected

    def test__datetime_time_tokens(self) -> None:
        assert format_date(dt.datetime(2020, 3, 5, 9, 7, 3), "HH:mm:ss") == "09:07:03"


class TestExtensions:
    """Tests for the extension registry."""

    def test__builtin_extensions_registered(self) -> None:
        assert {"slugify", "dateformat", "mdxpassthrough"} <= set(FIELD_EXTENSIONS)

    def test__duplicate_registration__raises(self) -> None:
        with pytest.raises(ValueError):
            field_extension("slugify")(lambda: None)


class TestResolvePost:
    """Tests for resolving posts."""

    def test__slug_from_title(self, options: BlogOptions) -> None:
        """Derive the slug from the title under the base path."""
        resolved = resolve_node(POST_TYPE, make_post(), options)

        assert resolved["slug"] == "/hello-world"

    def test__explicit_slug_with_base_path(self) -> None:
        """Prefix an explicit slug with the base path."""
        resolved = resolve_node(POST_TYPE, make_post(slug="/greeting"), BlogOptions(base_path="/en/"))

        assert resolved["slug"] == "/en/greeting"

    def test__date_uses_configured_format(self, options: BlogOptions) -> None:
        resolved = resolve_node(POST_TYPE, make_post(), options)

        assert resolved["date"] == "02.01.2021"

    def test__date_format_argument(self, options: BlogOptions) -> None:
        resolved = resolve_node(POST_TYPE, make_post(), options, date={"formatString": "YYYY"})

        assert resolved["date"] == "2021"

    def test__mdx_fields(self, options: BlogOptions) -> None:
        """Render html, excerpt and reading time from the body."""
        resolved = resolve_node(POST_TYPE, make_post(), options)

        assert resolved["body"] == "Hello *world*."
        assert resolved["html"] == "<p>Hello <em>world</em>.</p>"
        assert resolved["excerpt"] == "Hello world."
        assert resolved["timeToRead"] == 1
        assert resolved["tags"] == [{"name": "Static Sites", "slug": "static-sites"}]

    def test__excerpt_prune_length(self, options: BlogOptions) -> None:
        post = make_post(body="one two three four")

        resolved = resolve_node(POST_TYPE, post, options, excerpt={"pruneLength": 7})

        assert resolved["excerpt"] == "one two…"

    def test__missing_date__raises(self, options: BlogOptions) -> None:
        with pytest.raises(SchemaError) as exc_info:
            resolve_node(POST_TYPE, make_post(date=None), options)

        assert "MdxPost.date" in str(exc_info.value)
        assert exc_info.value.source == "posts/hello.md"

    def test__missing_title_and_slug__raises(self, options: BlogOptions) -> None:
        with pytest.raises(SchemaError):
            resolve_node(POST_TYPE, make_post(title=""), options)


class TestResolvePage:
    """Tests for resolving pages."""

    def test__page_slug_is_verbatim(self, options: BlogOptions) -> None:
        page = PageNode(source="pages/about.md", title="About", slug="about", body="Hi", css_class="wide")

        resolved = resolve_node(PAGE_TYPE, page, options)

        assert resolved["slug"] == "about"
        assert resolved["cssClass"] == "wide"
        assert resolved["excerpt"] == "Hi"

    def test__page_without_slug__raises(self, options: BlogOptions) -> None:
        page = PageNode(source="pages/about.md", title="About", slug="", body="Hi")

        with pytest.raises(SchemaError):
            resolve_node(PAGE_TYPE, page, options)


class TestTextHelpers:
    """Tests for excerpt and reading-time helpers."""

    def test__prune_short_text(self) -> None:
        assert prune_text("short  text", 140) == "short text"

    def test__prune_single_long_word(self) -> None:
        assert prune_text("abcdefghij", 4) == "abcd…"

    def test__time_to_read_rounds(self) -> None:
        assert time_to_read("<p>" + "word " * 530 + "</p>") == 2


class TestEmptyBody:
    """Tests for nodes without body text."""

    def test__post_without_body_resolves(self, options: BlogOptions) -> None:
        resolved = resolve_node(POST_TYPE, make_post(body=""), options)

        assert resolved["body"] == ""
        assert resolved["html"] == ""
        assert resolved["excerpt"] == ""
        assert resolved["timeToRead"] == 1

    def test__page_without_body_resolves(self, options: BlogOptions) -> None:
        page = PageNode(source="pages/now.md", title="Now", slug="now", body="")

        resolved = resolve_node(PAGE_TYPE, page, options)

        assert resolved["excerpt"] == ""
