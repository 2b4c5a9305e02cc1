from __future__ import annotations

import html as html_lib
import json
import re
from pathlib import Path

import markdown

TAG_RE = re.compile(r"<[^>]+>")
CJK_RE = re.compile(r"[\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uac00-\ud7af]")
WORD_RE = re.compile(r"[A-Za-z0-9]+(?:'[A-Za-z0-9]+)?")
PRUNE_SUFFIX = "…"
WORDS_PER_MINUTE = 265


def render_markdown(text: str) -> str:
    md = markdown.Markdown(extensions=["fenced_code", "tables"])
    return md.convert(text)


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def plain_text(html_text: str) -> str:
    text = html_lib.unescape(strip_tags(html_text))
    return " ".join(text.split())


def count_words(text: str) -> int:
    text = html_lib.unescape(text)
    cjk_count = len(CJK_RE.findall(text))
    text = CJK_RE.sub(" ", text)
    word_count = len(WORD_RE.findall(text))
    return cjk_count + word_count


def prune_text(text: str, length: int) -> str:
    text = " ".join(text.split())
    if len(text) <= length:
        return text
    head = text[: length + 1]
    cut = head.rfind(" ")
    if cut <= 0:
        return text[:length] + PRUNE_SUFFIX
    return head[:cut].rstrip(" ,.;:") + PRUNE_SUFFIX


def time_to_read(html_text: str) -> int:
    words = count_words(strip_tags(html_text))
    # Half minutes round up.
    return max(1, int(words / WORDS_PER_MINUTE + 0.5))


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def write_json(path: Path, data: object) -> None:
    write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
