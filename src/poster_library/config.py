"""Application configuration utilities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_SECTION_LABELS: dict[str, str] = {
    "fish_aquatics": "Fish & Aquatics",
    "eye-ear": "Eye & Ear",
    "oral-dental": "Oral & Dental",
    "_misc": "Misc",
}


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    manifest_url: AnyHttpUrl | None = Field(
        default=None,
        description="Remote manifest location; takes priority over manifest_path.",
    )
    manifest_path: Path = Field(
        default=Path("posters/manifest.json"),
        description="Local manifest file used when no manifest_url is configured.",
    )
    asset_base_url: str = Field(
        default="./",
        description="Base that item file paths are resolved against.",
    )
    version: str | None = Field(
        default=None,
        description="Catalog version sent as the cache-busting 'v' parameter.",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds for manifest fetches.",
    )
    user_agent: str = Field(
        default="Poster-Library/0.1",
        description="User-Agent header presented to remote servers.",
    )
    section_labels: Annotated[dict[str, str], NoDecode] = Field(
        default_factory=lambda: dict(DEFAULT_SECTION_LABELS),
        description="Category id to display label overrides (JSON or id:Label,id:Label).",
    )
    suggestion_limit: int = Field(
        default=8,
        ge=1,
        description="Maximum number of typeahead suggestions.",
    )
    suggestion_min_length: int = Field(
        default=2,
        ge=0,
        description="Minimum normalised query length before suggestions are offered.",
    )

    model_config = SettingsConfigDict(
        env_prefix="POSTER_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("section_labels", mode="before")
    @classmethod
    def _parse_labels(cls, value: Mapping[str, str] | str | None) -> dict[str, str]:
        if value is None:
            return dict(DEFAULT_SECTION_LABELS)
        if isinstance(value, Mapping):
            return {str(key): str(label) for key, label in value.items()}
        value = value.strip()
        if not value:
            return {}
        if value.startswith("{"):
            return {str(key): str(label) for key, label in json.loads(value).items()}
        labels: dict[str, str] = {}
        for item in value.split(","):
            section_id, _, label = item.partition(":")
            section_id = section_id.strip()
            label = label.strip()
            if not section_id or not label:
                continue
            labels[section_id] = label
        return labels


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached instance of application settings."""

    return Settings()
