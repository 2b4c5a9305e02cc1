from __future__ import annotations

from pathlib import Path

from .config import BlogOptions


def ensure_content_dirs(site_dir: Path, options: BlogOptions) -> list[Path]:
    created = []
    for directory in (site_dir / options.posts_path, site_dir / options.pages_path):
        if directory.exists():
            continue
        print(f'Initializing "{directory}" directory')
        directory.mkdir(parents=True, exist_ok=True)
        created.append(directory)
    return created
