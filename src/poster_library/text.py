"""Text canonicalisation helpers shared by indexing, filtering, and ranking."""

from __future__ import annotations

import re
import unicodedata
from typing import Any

_SEPARATOR_PATTERN = re.compile(r"[_-]+")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize(value: Any) -> str:
    """Canonicalise ``value`` for comparison.

    ``None`` becomes the empty string, anything else is coerced with ``str``.
    The result is lowercased, runs of ``_``/``-`` become a single space, runs
    of whitespace collapse to one space, and the ends are trimmed.
    """

    if value is None:
        return ""
    text = str(value).lower()
    text = _SEPARATOR_PATTERN.sub(" ", text)
    text = _WHITESPACE_PATTERN.sub(" ", text)
    return text.strip()


def prettify(identifier: str) -> str:
    """Turn a category id such as ``skin_coat`` into ``Skin Coat``."""

    words = _SEPARATOR_PATTERN.sub(" ", identifier).split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words if word)


def collation_key(label: str) -> tuple[str, str]:
    """Sort key approximating locale-aware ordering of display labels."""

    decomposed = unicodedata.normalize("NFKD", label)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), label
