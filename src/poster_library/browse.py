"""Browse state transitions and the view snapshot handed to renderers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from .filters import ALL_SECTIONS, apply_filter
from .metrics import record_query
from .models import PosterItem, Section, Suggestion
from .sections import SectionLabeler, build_sections
from .suggest import MIN_QUERY_LENGTH, SUGGESTION_LIMIT, rank

logger = logging.getLogger(__name__)

ALL_SECTIONS_LABEL = "All Sections"
LIBRARY_HEADING = "Poster Library"
LOAD_ERROR_COUNT = "manifest.json missing/failed"
LOAD_ERROR_MESSAGE = "manifest.json missing/failed. Generate posters/manifest.json and push."
EMPTY_CATALOG_MESSAGE = "No posters found."
NO_MATCHES_MESSAGE = "No posters match."


@dataclass(frozen=True)
class BrowseState:
    """Active section and search query; nothing else is tracked."""

    active_section: str = ALL_SECTIONS
    search_query: str = ""


def initial_state() -> BrowseState:
    return BrowseState()


def select_section(state: BrowseState, section_id: str) -> BrowseState:
    """Switch section; the query is always cleared in the same step."""

    return BrowseState(active_section=section_id, search_query="")


def type_query(state: BrowseState, text: str | None) -> BrowseState:
    return replace(state, search_query=text or "")


def reset(state: BrowseState | None = None) -> BrowseState:
    return initial_state()


def format_count(count: int) -> str:
    return f"{count} poster(s)"


@dataclass(frozen=True)
class NavEntry:
    """One row of the section navigation list."""

    id: str
    label: str
    count: int
    active: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "count": self.count, "active": self.active}


@dataclass(frozen=True)
class LibraryView:
    """Everything a renderer needs to draw the library page for one state."""

    state: BrowseState
    heading: str
    count_text: str
    items: tuple[PosterItem, ...] = field(default_factory=tuple)
    sections: tuple[NavEntry, ...] = field(default_factory=tuple)
    suggestions: tuple[Suggestion, ...] = field(default_factory=tuple)
    empty_message: str | None = None

    @classmethod
    def render(
        cls,
        items: Sequence[PosterItem],
        state: BrowseState,
        labeler: SectionLabeler | None = None,
        *,
        load_error: str | None = None,
        sections: Sequence[Section] | None = None,
        suggestion_limit: int = SUGGESTION_LIMIT,
        suggestion_min_length: int = MIN_QUERY_LENGTH,
    ) -> "LibraryView":
        labeler = labeler or SectionLabeler()
        if not items:
            return cls(
                state=state,
                heading=LIBRARY_HEADING,
                count_text=LOAD_ERROR_COUNT if load_error else format_count(0),
                empty_message=LOAD_ERROR_MESSAGE if load_error else EMPTY_CATALOG_MESSAGE,
            )

        if sections is None:
            sections = build_sections(items, labeler)
        filtered = apply_filter(items, state.active_section, state.search_query)
        suggestions = rank(
            items,
            state.search_query,
            limit=suggestion_limit,
            min_length=suggestion_min_length,
            labeler=labeler,
        )
        heading = (
            ALL_SECTIONS_LABEL
            if state.active_section == ALL_SECTIONS
            else labeler.label(state.active_section)
        )
        return cls(
            state=state,
            heading=heading,
            count_text=format_count(len(filtered)),
            items=tuple(filtered),
            sections=_nav_entries(items, sections, state.active_section),
            suggestions=tuple(suggestions),
            empty_message=None if filtered else NO_MATCHES_MESSAGE,
        )

    def to_dict(self, asset_base: str = "./") -> dict[str, Any]:
        return {
            "state": {
                "active_section": self.state.active_section,
                "search_query": self.state.search_query,
            },
            "heading": self.heading,
            "count_text": self.count_text,
            "items": [item_payload(item, asset_base) for item in self.items],
            "sections": [entry.to_dict() for entry in self.sections],
            "suggestions": [suggestion_payload(s, asset_base) for s in self.suggestions],
            "empty_message": self.empty_message,
        }


def _nav_entries(
    items: Sequence[PosterItem], sections: Iterable[Section], active: str
) -> tuple[NavEntry, ...]:
    entries = [
        NavEntry(
            id=ALL_SECTIONS,
            label=ALL_SECTIONS_LABEL,
            count=len(items),
            active=active == ALL_SECTIONS,
        )
    ]
    entries.extend(
        NavEntry(id=section.id, label=section.label, count=section.count, active=active == section.id)
        for section in sections
    )
    return tuple(entries)


def item_payload(item: PosterItem, asset_base: str = "./") -> dict[str, Any]:
    payload = item.model_dump(mode="json")
    payload["url"] = item.asset_url(asset_base)
    return payload


def suggestion_payload(suggestion: Suggestion, asset_base: str = "./") -> dict[str, Any]:
    return {
        "item": item_payload(suggestion.item, asset_base),
        "score": suggestion.score,
        "position": suggestion.position,
        "preview_tags": list(suggestion.preview_tags),
        "section_label": suggestion.section_label,
    }


class CatalogSession:
    """Holds the immutable item set for a session and the current browse state."""

    def __init__(
        self,
        items: Iterable[PosterItem],
        labeler: SectionLabeler | None = None,
        *,
        load_error: str | None = None,
        suggestion_limit: int = SUGGESTION_LIMIT,
        suggestion_min_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        self._items: tuple[PosterItem, ...] = tuple(items)
        self._labeler = labeler or SectionLabeler()
        self._load_error = load_error
        self._suggestion_limit = suggestion_limit
        self._suggestion_min_length = suggestion_min_length
        self._sections = tuple(build_sections(self._items, self._labeler))
        self._state = initial_state()

    @property
    def items(self) -> tuple[PosterItem, ...]:
        return self._items

    @property
    def labeler(self) -> SectionLabeler:
        return self._labeler

    @property
    def load_error(self) -> str | None:
        return self._load_error

    @property
    def state(self) -> BrowseState:
        return self._state

    def sections(self) -> list[Section]:
        return list(self._sections)

    def select_section(self, section_id: str) -> BrowseState:
        self._state = select_section(self._state, section_id)
        logger.debug("section_selected section=%s", section_id)
        return self._state

    def type_query(self, text: str | None) -> BrowseState:
        self._state = type_query(self._state, text)
        return self._state

    def reset(self) -> BrowseState:
        self._state = reset(self._state)
        return self._state

    def filtered(self, state: BrowseState | None = None) -> list[PosterItem]:
        state = state or self._state
        results = apply_filter(self._items, state.active_section, state.search_query)
        record_query("filter", len(results))
        return results

    def suggestions(self, query: str | None = None) -> list[Suggestion]:
        if query is None:
            query = self._state.search_query
        results = rank(
            self._items,
            query,
            limit=self._suggestion_limit,
            min_length=self._suggestion_min_length,
            labeler=self._labeler,
        )
        record_query("suggest", len(results))
        return results

    def view(self, state: BrowseState | None = None) -> LibraryView:
        view = LibraryView.render(
            self._items,
            state or self._state,
            self._labeler,
            load_error=self._load_error,
            sections=self._sections,
            suggestion_limit=self._suggestion_limit,
            suggestion_min_length=self._suggestion_min_length,
        )
        if self._items:
            record_query("filter", len(view.items))
            record_query("suggest", len(view.suggestions))
        return view
