from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from .bootstrap import ensure_content_dirs
from .config import ConfigError, default_options, load_config, theme_section
from .nodes import build_config_node
from .query import run_query
from .render import write_json
from .routes import QueryFailure, RouteDescriptor, RouteTable, create_pages

OVERRIDE_KEYS = {
    "base_path": "basePath",
    "blog_path": "blogPath",
    "posts_path": "postsPath",
    "pages_path": "pagesPath",
    "tags_path": "tagsPath",
    "date_format": "dateFormat",
}


def build_routes(args: argparse.Namespace, theme_options: dict) -> list[RouteDescriptor]:
    site_dir = Path(args.site_dir)
    merged = dict(theme_options)
    for attr, key in OVERRIDE_KEYS.items():
        value = getattr(args, attr, None)
        if value:
            merged[key] = value
    options = default_options(merged)

    ensure_content_dirs(site_dir, options)
    config_node = build_config_node(options)

    table = RouteTable()
    create_pages(lambda: run_query(site_dir, options), table, options)
    routes = table.routes()

    if args.dry_run:
        for route in routes:
            print(f"{route.path}  [{route.template_id}]")
        return routes

    output = Path(args.output)
    if not output.is_absolute():
        output = site_dir / output
    write_json(output, {"config": config_node, "routes": [route.to_dict() for route in routes]})
    print(f"Route manifest written to: {output}")
    return routes


def main(argv: list[str] | None = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
        theme_options = theme_section(config)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    parser = argparse.ArgumentParser(description="Generate page routes for a minimal Markdown blog.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--site-dir", default=cfg_str("site_dir", "."), help="Site root holding the content folders.")
    parser.add_argument(
        "--output",
        default=cfg_str("output", "public/routes.json"),
        help="Route manifest path, relative to the site root.",
    )
    parser.add_argument("--base-path", default="", help="Override the basePath theme option.")
    parser.add_argument("--blog-path", default="", help="Override the blogPath theme option.")
    parser.add_argument("--posts-path", default="", help="Override the postsPath theme option.")
    parser.add_argument("--pages-path", default="", help="Override the pagesPath theme option.")
    parser.add_argument("--tags-path", default="", help="Override the tagsPath theme option.")
    parser.add_argument("--date-format", default="", help="Override the dateFormat theme option.")
    parser.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Print routes instead of writing the manifest.",
    )
    args = parser.parse_args(argv)

    start = time.perf_counter()
    try:
        routes = build_routes(args, theme_options)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    except QueryFailure as exc:
        print(exc, file=sys.stderr)
        for error in exc.errors:
            print(f"  {error}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Generated {len(routes)} routes in {elapsed:.2f}s.")


if __name__ == "__main__":
    main()
