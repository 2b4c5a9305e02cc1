from __future__ import annotations

import hashlib
import json

from .config import BlogOptions

CONFIG_NODE_ID = "minimalblog-core-config"
CONFIG_NODE_TYPE = "BlogConfig"


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def blog_config(options: BlogOptions) -> dict:
    return {
        "basePath": options.base_path,
        "blogPath": options.blog_path,
        "postsPath": options.posts_path,
        "pagesPath": options.pages_path,
        "tagsPath": options.tags_path,
        "externalLinks": [{"name": link.name, "url": link.url} for link in options.external_links],
        "navigation": [{"title": entry.title, "slug": entry.slug} for entry in options.navigation],
        "showLineNumbers": options.show_line_numbers,
    }


def build_config_node(options: BlogOptions) -> dict:
    config = blog_config(options)
    content = json.dumps(config, sort_keys=True, ensure_ascii=False)
    return {
        **config,
        "id": CONFIG_NODE_ID,
        "parent": None,
        "children": [],
        "internal": {
            "type": CONFIG_NODE_TYPE,
            "content": content,
            "contentDigest": hash_text(content),
            "description": "Blog options",
        },
    }
