"""Shared fixtures for minimalblog tests."""

from pathlib import Path

import pytest
from minimalblog.config import BlogOptions

HELLO_POST = """---
title: Hello World
date: 2021-01-02
tags:
  - Python
  - Static Sites
---
Hello *world*, this is the first post.
"""

SECOND_POST = """---
title: Second Post
slug: second
date: 2021-03-04
tags: [Python]
description: The sequel.
---
More words here.
"""

ABOUT_PAGE = """---
title: About
slug: about
---
About me.
"""


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def options() -> BlogOptions:
    return BlogOptions()


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    write(tmp_path / "content/posts/hello-world/index.mdx", HELLO_POST)
    write(tmp_path / "content/posts/second.md", SECOND_POST)
    write(tmp_path / "content/pages/about/index.mdx", ABOUT_PAGE)
    return tmp_path
