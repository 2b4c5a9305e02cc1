from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path

from .config import BlogOptions
from .content import ContentError, PageNode, PostNode, list_content_files, read_page, read_post, source_key
from .schema import PAGE_TYPE, POST_TYPE, SchemaError, resolve_node


@dataclass(frozen=True)
class TagGroup:
    name: str
    count: int


@dataclass
class QueryResult:
    data: dict = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def posts(self) -> list[dict]:
        return self.data.get("posts", [])

    @property
    def pages(self) -> list[dict]:
        return self.data.get("pages", [])

    @property
    def tag_groups(self) -> list[TagGroup]:
        return self.data.get("tag_groups", [])


def _sort_key(node: PostNode) -> tuple[dt.datetime, str]:
    value = node.date
    if not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time())
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.replace(tzinfo=None), node.source


def group_tags(posts: list[dict]) -> list[TagGroup]:
    counts: dict[str, int] = {}
    for post in posts:
        for tag in post.get("tags") or []:
            name = tag["name"]
            counts[name] = counts.get(name, 0) + 1
    return [TagGroup(name=name, count=counts[name]) for name in sorted(counts)]


def run_query(site_dir: Path, options: BlogOptions) -> QueryResult:
    errors: list[str] = []
    post_nodes: list[PostNode] = []
    page_nodes: list[PageNode] = []

    for path in list_content_files(site_dir / options.posts_path):
        try:
            post_nodes.append(read_post(path, source_key(path, site_dir)))
        except ContentError as exc:
            errors.append(str(exc))
    for path in list_content_files(site_dir / options.pages_path):
        try:
            page_nodes.append(read_page(path, source_key(path, site_dir)))
        except ContentError as exc:
            errors.append(str(exc))

    posts = []
    for node in post_nodes:
        try:
            posts.append((node, resolve_node(POST_TYPE, node, options)))
        except SchemaError as exc:
            errors.append(str(exc))
    pages = []
    for node in page_nodes:
        try:
            pages.append(resolve_node(PAGE_TYPE, node, options))
        except SchemaError as exc:
            errors.append(str(exc))

    if errors:
        return QueryResult(errors=errors)

    posts.sort(key=lambda item: _sort_key(item[0]), reverse=True)
    resolved_posts = [resolved for _, resolved in posts]
    return QueryResult(
        data={
            "posts": resolved_posts,
            "pages": pages,
            "tag_groups": group_tags(resolved_posts),
        }
    )
