from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .utils import parse_bool

DEFAULT_BASE_PATH = "/"
DEFAULT_BLOG_PATH = "/blog"
DEFAULT_POSTS_PATH = "content/posts"
DEFAULT_PAGES_PATH = "content/pages"
DEFAULT_TAGS_PATH = "/tags"
DEFAULT_DATE_FORMAT = "DD.MM.YYYY"
DEFAULT_FEED_TITLE = "Minimal Blog"

OPTION_KEYS = {
    "base_path": ("basePath", "base_path"),
    "blog_path": ("blogPath", "blog_path"),
    "posts_path": ("postsPath", "posts_path"),
    "pages_path": ("pagesPath", "pages_path"),
    "tags_path": ("tagsPath", "tags_path"),
    "date_format": ("dateFormat", "date_format", "formatString", "format_string"),
    "feed_title": ("feedTitle", "feed_title"),
    "external_links": ("externalLinks", "external_links"),
    "navigation": ("navigation",),
    "show_line_numbers": ("showLineNumbers", "show_line_numbers"),
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ExternalLink:
    name: str
    url: str


@dataclass(frozen=True)
class NavigationEntry:
    title: str
    slug: str


@dataclass(frozen=True)
class BlogOptions:
    base_path: str = DEFAULT_BASE_PATH
    blog_path: str = DEFAULT_BLOG_PATH
    posts_path: str = DEFAULT_POSTS_PATH
    pages_path: str = DEFAULT_PAGES_PATH
    tags_path: str = DEFAULT_TAGS_PATH
    date_format: str = DEFAULT_DATE_FORMAT
    feed_title: str = DEFAULT_FEED_TITLE
    external_links: tuple[ExternalLink, ...] = field(default_factory=tuple)
    navigation: tuple[NavigationEntry, ...] = field(default_factory=tuple)
    show_line_numbers: bool = True


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data


def theme_section(config: dict) -> dict:
    section = config.get("theme")
    if section is None:
        return config
    if not isinstance(section, dict):
        raise ConfigError("The [theme] section must be a mapping.")
    return section


def _lookup(theme_options: dict, name: str) -> object:
    for key in OPTION_KEYS[name]:
        value = theme_options.get(key)
        if value not in (None, "", []):
            return value
    return None


def _external_links(value: object) -> tuple[ExternalLink, ...]:
    links = []
    for item in value or []:
        if not isinstance(item, dict) or not item.get("name") or not item.get("url"):
            raise ConfigError(f"External link needs a name and a url: {item!r}")
        links.append(ExternalLink(name=str(item["name"]), url=str(item["url"])))
    return tuple(links)


def _navigation(value: object) -> tuple[NavigationEntry, ...]:
    entries = []
    for item in value or []:
        if not isinstance(item, dict) or not item.get("title") or not item.get("slug"):
            raise ConfigError(f"Navigation entry needs a title and a slug: {item!r}")
        entries.append(NavigationEntry(title=str(item["title"]), slug=str(item["slug"])))
    return tuple(entries)


def default_options(theme_options: dict | None = None) -> BlogOptions:
    theme_options = theme_options or {}

    def opt_str(name: str, default: str) -> str:
        value = _lookup(theme_options, name)
        return default if value is None else str(value)

    show_line_numbers = _lookup(theme_options, "show_line_numbers")
    return BlogOptions(
        base_path=opt_str("base_path", DEFAULT_BASE_PATH),
        blog_path=opt_str("blog_path", DEFAULT_BLOG_PATH),
        posts_path=opt_str("posts_path", DEFAULT_POSTS_PATH),
        pages_path=opt_str("pages_path", DEFAULT_PAGES_PATH),
        tags_path=opt_str("tags_path", DEFAULT_TAGS_PATH),
        date_format=opt_str("date_format", DEFAULT_DATE_FORMAT),
        feed_title=opt_str("feed_title", DEFAULT_FEED_TITLE),
        external_links=_external_links(_lookup(theme_options, "external_links")),
        navigation=_navigation(_lookup(theme_options, "navigation")),
        show_line_numbers=True if show_line_numbers is None else parse_bool(show_line_numbers),
    )
