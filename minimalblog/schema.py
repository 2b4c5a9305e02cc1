"""Content types and the field extensions that resolve them.

Each field of a content type may name an extension. Extensions are
registered once, at import time, in ``FIELD_EXTENSIONS``; a type definition
refers to them by name and ``resolve_node`` turns a sourced node into the
plain mapping handed to the query and route layers.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable, Optional

from .config import BlogOptions
from .render import plain_text, prune_text, render_markdown, time_to_read
from .utils import join_path, kebab_case

Resolver = Callable[[object, dict, dict], object]

FIELD_EXTENSIONS: dict[str, Callable[..., Resolver]] = {}

DATE_TOKEN_RE = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|mm|ss")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class SchemaError(Exception):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


def field_extension(name: str) -> Callable[[Callable[..., Resolver]], Callable[..., Resolver]]:
    def register(factory: Callable[..., Resolver]) -> Callable[..., Resolver]:
        if name in FIELD_EXTENSIONS:
            raise ValueError(f"Field extension already registered: {name}")
        FIELD_EXTENSIONS[name] = factory
        return factory

    return register


def format_date(value: dt.date, format_string: str) -> str:
    hour = value.hour if isinstance(value, dt.datetime) else 0
    minute = value.minute if isinstance(value, dt.datetime) else 0
    second = value.second if isinstance(value, dt.datetime) else 0

    def repl(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        return {
            "YYYY": f"{value.year:04d}",
            "YY": f"{value.year % 100:02d}",
            "MMMM": MONTH_NAMES[value.month - 1],
            "MMM": MONTH_NAMES[value.month - 1][:3],
            "MM": f"{value.month:02d}",
            "M": str(value.month),
            "DD": f"{value.day:02d}",
            "D": str(value.day),
            "dddd": DAY_NAMES[value.weekday()],
            "ddd": DAY_NAMES[value.weekday()][:3],
            "HH": f"{hour:02d}",
            "H": str(hour),
            "mm": f"{minute:02d}",
            "ss": f"{second:02d}",
        }[token]

    return DATE_TOKEN_RE.sub(repl, format_string)


class MdxFields:
    """Lazily derived markdown fields of one node, shared by its resolvers."""

    def __init__(self, body: str) -> None:
        self.body = body

    @cached_property
    def html(self) -> str:
        return render_markdown(self.body)

    @cached_property
    def text(self) -> str:
        return plain_text(self.html)

    def excerpt(self, prune_length: int) -> str:
        return prune_text(self.text, prune_length)

    @cached_property
    def time_to_read(self) -> int:
        return time_to_read(self.html)


@field_extension("slugify")
def slugify_extension() -> Resolver:
    def resolve(source: object, args: dict, context: dict) -> str:
        options: BlogOptions = context["options"]
        slug = getattr(source, "slug", "") or kebab_case(getattr(source, "title", ""))
        if not slug:
            return ""
        return join_path(options.base_path, slug)

    return resolve


@field_extension("dateformat")
def dateformat_extension() -> Resolver:
    def resolve(source: object, args: dict, context: dict) -> Optional[str]:
        value = getattr(source, "date", None)
        if value is None:
            return None
        format_string = args.get("formatString") or context["options"].date_format
        return format_date(value, format_string)

    return resolve


@field_extension("mdxpassthrough")
def mdx_passthrough_extension(field_name: str) -> Resolver:
    def resolve(source: object, args: dict, context: dict) -> object:
        mdx: MdxFields = context["mdx"]
        if field_name == "body":
            return mdx.body
        if field_name == "html":
            return mdx.html
        if field_name == "excerpt":
            return mdx.excerpt(int(args.get("pruneLength", 140)))
        if field_name == "timeToRead":
            return mdx.time_to_read
        raise SchemaError(getattr(source, "source", "<node>"), f"unknown mdx field {field_name!r}")

    return resolve


@dataclass(frozen=True)
class FieldDef:
    name: str
    required: bool = False
    non_empty: bool = False
    attr: str = ""
    extension: str = ""
    extension_args: dict = field(default_factory=dict)
    default_args: dict = field(default_factory=dict)

    def resolver(self) -> Resolver:
        if self.extension:
            if self.extension not in FIELD_EXTENSIONS:
                raise KeyError(f"Unknown field extension: {self.extension}")
            return FIELD_EXTENSIONS[self.extension](**self.extension_args)
        attr = self.attr or self.name

        def resolve(source: object, args: dict, context: dict) -> object:
            return getattr(source, attr, None)

        return resolve


@dataclass(frozen=True)
class TypeDef:
    name: str
    fields: tuple[FieldDef, ...]

    @cached_property
    def resolvers(self) -> dict[str, Resolver]:
        return {item.name: item.resolver() for item in self.fields}


def _tags(source: object, args: dict, context: dict) -> list[dict]:
    return [{"name": tag.name, "slug": tag.slug} for tag in getattr(source, "tags", ())]


POST_TYPE = TypeDef(
    "MdxPost",
    (
        FieldDef("slug", required=True, non_empty=True, extension="slugify"),
        FieldDef("title", required=True, non_empty=True),
        FieldDef("date", required=True, non_empty=True, extension="dateformat"),
        FieldDef(
            "excerpt",
            required=True,
            extension="mdxpassthrough",
            extension_args={"field_name": "excerpt"},
            default_args={"pruneLength": 140},
        ),
        FieldDef("body", required=True, extension="mdxpassthrough", extension_args={"field_name": "body"}),
        FieldDef("html", required=True, extension="mdxpassthrough", extension_args={"field_name": "html"}),
        FieldDef(
            "timeToRead",
            required=True,
            extension="mdxpassthrough",
            extension_args={"field_name": "timeToRead"},
        ),
        FieldDef("tags"),
        FieldDef("banner"),
        FieldDef("description"),
    ),
)

PAGE_TYPE = TypeDef(
    "MdxPage",
    (
        FieldDef("slug", required=True, non_empty=True),
        FieldDef("title", required=True, non_empty=True),
        FieldDef(
            "excerpt",
            required=True,
            extension="mdxpassthrough",
            extension_args={"field_name": "excerpt"},
            default_args={"pruneLength": 140},
        ),
        FieldDef("body", required=True, extension="mdxpassthrough", extension_args={"field_name": "body"}),
        FieldDef("cssClass", attr="css_class"),
    ),
)


def resolve_node(
    type_def: TypeDef,
    node: object,
    options: BlogOptions,
    **field_args: dict,
) -> dict:
    context = {"options": options, "mdx": MdxFields(getattr(node, "body", ""))}
    source = getattr(node, "source", "<node>")
    resolved = {}
    for item in type_def.fields:
        if item.name == "tags":
            resolved["tags"] = _tags(node, {}, context)
            continue
        args = {**item.default_args, **field_args.get(item.name, {})}
        value = type_def.resolvers[item.name](node, args, context)
        if item.required and value is None:
            raise SchemaError(source, f"{type_def.name}.{item.name} must not be null")
        if item.non_empty and value == "":
            raise SchemaError(source, f"{type_def.name}.{item.name} must not be empty")
        resolved[item.name] = value
    return resolved
