"""Data models for manifest items, sections, and suggestions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PosterItem(BaseModel):
    """A single catalog entry as listed in the manifest."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    category: str = ""
    file: str = ""
    tags: tuple[str, ...] | None = Field(
        default=None,
        description="Explicit tags; None when the manifest supplies none.",
    )

    @field_validator("title", "category", "file", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> tuple[str, ...] | None:
        if value is None:
            return None
        if isinstance(value, str):
            return (value,) if value else None
        if isinstance(value, (list, tuple)):
            tags = tuple(tag for tag in value if isinstance(tag, str) and tag)
            return tags or None
        return (str(value),)

    def asset_url(self, base: str = "./") -> str:
        """Resolve the item's relative ``file`` against an asset base."""

        if not base:
            return self.file
        return base.rstrip("/") + "/" + self.file.lstrip("/")


class Manifest(BaseModel):
    """The full list of catalog items for a session."""

    items: list[PosterItem] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_list(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"items": value}
        if isinstance(value, dict) and value.get("items") is None:
            return {**value, "items": []}
        return value


class Section(BaseModel):
    """A category grouping with its display label and item count."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    count: int


class Suggestion(BaseModel):
    """A ranked typeahead candidate."""

    model_config = ConfigDict(frozen=True)

    item: PosterItem
    score: int
    position: int = Field(description="Index of the item in the manifest.")
    preview_tags: tuple[str, ...] = Field(default_factory=tuple)
    section_label: str = ""
