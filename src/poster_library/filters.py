"""Grid filter combining the active section with a free-text query."""

from __future__ import annotations

from collections.abc import Iterable

from .models import PosterItem
from .tags import effective_tag_text
from .text import normalize

ALL_SECTIONS = "ALL"


def matches_query(item: PosterItem, query: str) -> bool:
    """Return True when the already-normalised ``query`` occurs in any searchable field."""

    if not query:
        return True
    return (
        query in normalize(item.title)
        or query in normalize(item.file)
        or query in normalize(item.category)
        or query in normalize(effective_tag_text(item))
    )


def in_section(item: PosterItem, section: str) -> bool:
    return section == ALL_SECTIONS or item.category == section


def apply_filter(
    items: Iterable[PosterItem], active_section: str, query: str | None
) -> list[PosterItem]:
    """Return the items visible for ``active_section`` and ``query``, in input order."""

    normalized = normalize(query)
    return [
        item
        for item in items
        if in_section(item, active_section) and matches_query(item, normalized)
    ]
