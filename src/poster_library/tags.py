"""Fallback tag derivation for manifest items without explicit tags."""

from __future__ import annotations

import re
from functools import lru_cache

from .models import PosterItem
from .text import normalize

TAG_LIMIT = 12
TAG_MIN_LENGTH = 3

_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]+")


@lru_cache(maxsize=4096)
def _derive(title: str, category: str, file: str) -> tuple[str, ...]:
    words = normalize(f"{title} {category} {file}").split(" ")
    tags: list[str] = []
    seen = set()
    for word in words:
        token = _NON_ALNUM_PATTERN.sub("", word)
        if len(token) < TAG_MIN_LENGTH or token in seen:
            continue
        seen.add(token)
        tags.append(token)
        if len(tags) >= TAG_LIMIT:
            break
    return tuple(tags)


def derive_tags(item: PosterItem) -> tuple[str, ...]:
    """Synthesise up to twelve lowercase alphanumeric tokens from title, category, and file.

    Tokens keep first-seen order, are deduplicated before truncation, and are
    at least three characters long once non-alphanumerics are stripped.
    """

    return _derive(item.title or "", item.category or "", item.file or "")


def effective_tags(item: PosterItem) -> tuple[str, ...]:
    """Explicit tags when present and non-empty, otherwise the derived set."""

    if item.tags:
        return tuple(item.tags)
    return derive_tags(item)


def effective_tag_text(item: PosterItem) -> str:
    return " ".join(effective_tags(item))
