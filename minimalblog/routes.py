from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .config import BlogOptions
from .query import QueryResult
from .utils import join_path, kebab_case

HOMEPAGE_TEMPLATE = "homepage"
BLOG_TEMPLATE = "blog"
TAGS_TEMPLATE = "tags"
POST_TEMPLATE = "post"
PAGE_TEMPLATE = "page"
TAG_TEMPLATE = "tag"


class QueryFailure(Exception):
    def __init__(self, errors: list) -> None:
        super().__init__("There was an error loading your posts or pages")
        self.errors = list(errors)


@dataclass(frozen=True)
class RouteDescriptor:
    path: str
    template_id: str
    context: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"path": self.path, "template": self.template_id, "context": dict(self.context)}


def _iter_routes(result: QueryResult, options: BlogOptions) -> Iterator[RouteDescriptor]:
    date_format = options.date_format

    yield RouteDescriptor(options.base_path, HOMEPAGE_TEMPLATE, {"dateFormat": date_format})
    yield RouteDescriptor(join_path(options.base_path, options.blog_path), BLOG_TEMPLATE, {"dateFormat": date_format})
    yield RouteDescriptor(join_path(options.base_path, options.tags_path), TAGS_TEMPLATE, {})

    for post in result.posts:
        yield RouteDescriptor(
            post["slug"],
            POST_TEMPLATE,
            {"slug": post["slug"], "dateFormat": date_format},
        )

    for page in result.pages:
        yield RouteDescriptor(join_path(options.base_path, page["slug"]), PAGE_TEMPLATE, {"slug": page["slug"]})

    for group in result.tag_groups:
        slug = kebab_case(group.name)
        yield RouteDescriptor(
            join_path(options.base_path, options.tags_path, slug),
            TAG_TEMPLATE,
            {"slug": slug, "name": group.name, "dateFormat": date_format},
        )


def generate_routes(result: QueryResult, options: BlogOptions) -> list[RouteDescriptor]:
    if result.errors:
        raise QueryFailure(result.errors)
    return list(_iter_routes(result, options))


def create_pages(
    query: Callable[[], QueryResult],
    create_page: Callable[[RouteDescriptor], None],
    options: BlogOptions,
) -> list[RouteDescriptor]:
    routes = generate_routes(query(), options)
    for route in routes:
        create_page(route)
    return routes


class RouteTable:
    """Pages registered by path; a later registration replaces an earlier one."""

    def __init__(self) -> None:
        self._routes: dict[str, RouteDescriptor] = {}

    def __call__(self, route: RouteDescriptor) -> None:
        self.add(route)

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def add(self, route: RouteDescriptor) -> None:
        previous = self._routes.get(route.path)
        if previous is not None:
            print(
                f"Warning: route {route.path} ({previous.template_id}) replaced by {route.template_id}.",
                file=sys.stderr,
            )
        self._routes[route.path] = route

    def get(self, path: str) -> RouteDescriptor | None:
        return self._routes.get(path)

    def routes(self) -> list[RouteDescriptor]:
        return list(self._routes.values())
