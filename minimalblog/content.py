from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .utils import kebab_case

CONTENT_SUFFIXES = {".md", ".mdx"}


class ContentError(Exception):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


@dataclass(frozen=True)
class PostTag:
    name: str
    slug: str

    @classmethod
    def from_name(cls, name: str) -> PostTag:
        return cls(name=name, slug=kebab_case(name))


@dataclass(frozen=True)
class PostNode:
    source: str
    title: str
    slug: str
    date: dt.date | None
    body: str
    description: str = ""
    banner: str = ""
    tags: tuple[PostTag, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PageNode:
    source: str
    title: str
    slug: str
    body: str
    css_class: str = ""


def parse_front_matter(text: str, source: str = "<string>") -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    try:
        meta = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as exc:
        raise ContentError(source, f"invalid front matter: {exc}") from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise ContentError(source, "front matter must be a mapping")
    body = "\n".join(lines[end + 1 :])
    return meta, body


def parse_date(value: object, source: str) -> dt.date | None:
    if value is None or value == "":
        return None
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    try:
        if "T" in text or " " in text:
            return dt.datetime.fromisoformat(text)
        return dt.date.fromisoformat(text)
    except ValueError as exc:
        raise ContentError(source, f"invalid date {text!r}") from exc


def parse_tags(value: object, source: str) -> tuple[PostTag, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        names = [item.strip() for item in value.split(",")]
    elif isinstance(value, list):
        names = [str(item).strip() for item in value if item is not None]
    else:
        raise ContentError(source, "tags must be a list")
    return tuple(PostTag.from_name(name) for name in names if name)


def list_content_files(root: Path) -> list[Path]:
    if not root.exists():
        return []
    files = [path for path in root.rglob("*") if path.is_file() and path.suffix.lower() in CONTENT_SUFFIXES]
    return sorted(files, key=lambda p: p.as_posix())


def _text(meta: dict, key: str) -> str:
    value = meta.get(key)
    return "" if value is None else str(value).strip()


def read_post(path: Path, source: str) -> PostNode:
    meta, body = parse_front_matter(path.read_text(encoding="utf-8"), source)
    return PostNode(
        source=source,
        title=_text(meta, "title"),
        slug=_text(meta, "slug"),
        date=parse_date(meta.get("date"), source),
        body=body,
        description=_text(meta, "description"),
        banner=_text(meta, "banner"),
        tags=parse_tags(meta.get("tags"), source),
    )


def read_page(path: Path, source: str) -> PageNode:
    meta, body = parse_front_matter(path.read_text(encoding="utf-8"), source)
    return PageNode(
        source=source,
        title=_text(meta, "title"),
        slug=_text(meta, "slug"),
        body=body,
        css_class=_text(meta, "cssClass"),
    )


def source_key(path: Path, site_dir: Path) -> str:
    try:
        return path.relative_to(site_dir).as_posix()
    except ValueError:
        return path.as_posix()
