"""Weighted substring ranking for live typeahead suggestions."""

from __future__ import annotations

from collections.abc import Sequence

from .models import PosterItem, Suggestion
from .sections import SectionLabeler
from .tags import effective_tag_text, effective_tags
from .text import normalize

SUGGESTION_LIMIT = 8
MIN_QUERY_LENGTH = 2
PREVIEW_TAG_COUNT = 3

TITLE_MATCH = 6
TAG_MATCH = 5
CATEGORY_MATCH = 2
FILE_MATCH = 1
TITLE_PREFIX = 3
TAG_PREFIX = 2


def score_item(item: PosterItem, query: str) -> int:
    """Score an item against an already-normalised query."""

    title = normalize(item.title)
    tags = normalize(effective_tag_text(item))
    score = 0
    if query in title:
        score += TITLE_MATCH
    if query in tags:
        score += TAG_MATCH
    if query in normalize(item.category):
        score += CATEGORY_MATCH
    if query in normalize(item.file):
        score += FILE_MATCH
    if title.startswith(query):
        score += TITLE_PREFIX
    if tags.startswith(query):
        score += TAG_PREFIX
    return score


def rank(
    items: Sequence[PosterItem],
    raw_query: str | None,
    *,
    limit: int = SUGGESTION_LIMIT,
    min_length: int = MIN_QUERY_LENGTH,
    labeler: SectionLabeler | None = None,
) -> list[Suggestion]:
    """Return scored suggestions, best first, ties kept in manifest order."""

    query = normalize(raw_query)
    if len(query) < min_length:
        return []

    scored: list[tuple[int, int, PosterItem]] = []
    for position, item in enumerate(items):
        score = score_item(item, query)
        if score > 0:
            scored.append((score, position, item))
    scored.sort(key=lambda entry: (-entry[0], entry[1]))

    labeler = labeler or SectionLabeler()
    return [
        Suggestion(
            item=item,
            score=score,
            position=position,
            preview_tags=effective_tags(item)[:PREVIEW_TAG_COUNT],
            section_label=labeler.label(item.category),
        )
        for score, position, item in scored[:limit]
    ]


def suggest(items: Sequence[PosterItem], raw_query: str | None) -> list[PosterItem]:
    """Return at most eight items for ``raw_query`` ordered by descending score."""

    return [suggestion.item for suggestion in rank(items, raw_query)]
