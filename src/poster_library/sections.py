"""Catalog index: aggregate manifest items into labelled sections."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import PosterItem, Section
from .text import collation_key, prettify


class SectionLabeler:
    """Maps category ids to display labels, honouring configured overrides."""

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        self._overrides: dict[str, str] = dict(overrides or {})

    @property
    def overrides(self) -> dict[str, str]:
        return dict(self._overrides)

    def label(self, section_id: str) -> str:
        override = self._overrides.get(section_id)
        if override:
            return override
        return prettify(section_id)


def build_sections(
    items: Iterable[PosterItem], labeler: SectionLabeler | None = None
) -> list[Section]:
    """Group items by exact category and return sections ordered by label."""

    labeler = labeler or SectionLabeler()
    counts: dict[str, int] = {}
    for item in items:
        counts[item.category] = counts.get(item.category, 0) + 1

    sections = [
        Section(id=category, label=labeler.label(category), count=count)
        for category, count in counts.items()
    ]
    sections.sort(key=lambda section: collation_key(section.label))
    return sections
