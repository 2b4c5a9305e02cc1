from __future__ import annotations

import re

SLASH_RUN_RE = re.compile(r"/{2,}")
APOSTROPHE_RE = re.compile(r"['’]")
WORD_CHUNK_RE = re.compile(r"[^\W_]+", re.UNICODE)


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def normalize_path(path: str) -> str:
    return SLASH_RUN_RE.sub("/", path)


def join_path(*parts: str) -> str:
    """Join URL path segments under a leading slash, collapsing duplicate separators."""
    return normalize_path("/" + "/".join(parts))


def _char_kind(char: str) -> str:
    if char.isdigit():
        return "digit"
    if char.isupper():
        return "upper"
    # Lowercase and uncased letters (CJK, etc.) group together.
    return "lower"


def _is_word_break(prev: str, char: str, following: str) -> bool:
    prev_kind = _char_kind(prev)
    kind = _char_kind(char)
    if (prev_kind == "digit") != (kind == "digit"):
        return True
    if prev_kind == "lower" and kind == "upper":
        return True
    # Acronym followed by a capitalized word: "XMLHttp" -> "XML", "Http".
    return prev_kind == "upper" and kind == "upper" and bool(following) and _char_kind(following) == "lower"


def split_chunk(chunk: str) -> list[str]:
    words: list[str] = []
    current = ""
    for index, char in enumerate(chunk):
        following = chunk[index + 1] if index + 1 < len(chunk) else ""
        if current and _is_word_break(current[-1], char, following):
            words.append(current)
            current = ""
        current += char
    if current:
        words.append(current)
    return words


def split_words(text: str) -> list[str]:
    text = APOSTROPHE_RE.sub("", text)
    words: list[str] = []
    for chunk in WORD_CHUNK_RE.findall(text):
        words.extend(split_chunk(chunk))
    return words


def kebab_case(text: str) -> str:
    return "-".join(word.lower() for word in split_words(text))
