"""Core package for the poster library catalog engine."""

from .browse import BrowseState, CatalogSession, LibraryView
from .config import Settings, get_settings
from .filters import ALL_SECTIONS, apply_filter
from .manifest import ManifestLoad, load_manifest
from .models import Manifest, PosterItem, Section, Suggestion
from .sections import SectionLabeler, build_sections
from .suggest import rank, suggest
from .tags import derive_tags, effective_tag_text
from .text import normalize

__all__ = [
    "ALL_SECTIONS",
    "BrowseState",
    "CatalogSession",
    "LibraryView",
    "Manifest",
    "ManifestLoad",
    "PosterItem",
    "Section",
    "SectionLabeler",
    "Settings",
    "Suggestion",
    "apply_filter",
    "build_sections",
    "derive_tags",
    "effective_tag_text",
    "get_settings",
    "load_manifest",
    "normalize",
    "rank",
    "suggest",
]
