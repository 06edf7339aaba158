"""Command-line interface for the poster library."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from .browse import BrowseState, CatalogSession
from .config import Settings, get_settings
from .filters import ALL_SECTIONS
from .main import serve_http
from .manifest import load_manifest
from .sections import SectionLabeler


async def _open_session(settings: Settings, manifest: Path | None) -> CatalogSession:
    result = await load_manifest(settings, path=manifest)
    if result.error:
        print(f"! Manifest unavailable: {result.error}")
    return CatalogSession(
        result.manifest.items,
        SectionLabeler(settings.section_labels),
        load_error=result.error,
        suggestion_limit=settings.suggestion_limit,
        suggestion_min_length=settings.suggestion_min_length,
    )


async def _sections_async(settings: Settings, *, manifest: Path | None) -> None:
    session = await _open_session(settings, manifest)
    print(f"→ All Sections: {len(session.items)} poster(s)")
    for section in session.sections():
        print(f"   {section.id}: {section.label} ({section.count})")


async def _search_async(
    settings: Settings,
    *,
    manifest: Path | None,
    section: str,
    query: str,
) -> None:
    session = await _open_session(settings, manifest)
    view = session.view(BrowseState(active_section=section, search_query=query))
    print(f"→ {view.heading}: {view.count_text}")
    for item in view.items:
        print(f"   - {item.title} [{session.labeler.label(item.category)}] {item.file}")
    if view.empty_message:
        print(f"   {view.empty_message}")


async def _suggest_async(settings: Settings, *, manifest: Path | None, query: str) -> None:
    session = await _open_session(settings, manifest)
    suggestions = session.suggestions(query)
    print(f"→ Suggestions for '{query}': {len(suggestions)}")
    for suggestion in suggestions:
        tags = ", ".join(suggestion.preview_tags)
        print(
            f"   {suggestion.score:>2} {suggestion.item.title} "
            f"[{suggestion.section_label}] ({tags})"
        )


def _add_manifest_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--manifest",
        type=Path,
        help="Read the manifest from this file instead of the configured location",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CLI helpers for browsing and searching the poster library",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host/IP to bind")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    serve_parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    sections_parser = subparsers.add_parser("sections", help="List sections and counts")
    _add_manifest_argument(sections_parser)

    search_parser = subparsers.add_parser(
        "search", help="Filter the catalog by section and query"
    )
    search_parser.add_argument(
        "--section",
        default=ALL_SECTIONS,
        help=f"Section id to browse (default: {ALL_SECTIONS})",
    )
    search_parser.add_argument("--query", default="", help="Free-text query")
    _add_manifest_argument(search_parser)

    suggest_parser = subparsers.add_parser("suggest", help="Rank typeahead suggestions")
    suggest_parser.add_argument("query", help="Partial query as typed")
    _add_manifest_argument(suggest_parser)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    if args.command == "serve":
        import logging

        logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
        asyncio.run(
            serve_http(
                settings,
                host=args.host,
                port=args.port,
                log_level=args.log_level,
            )
        )
        return 0

    if args.command == "sections":
        asyncio.run(_sections_async(settings, manifest=args.manifest))
        return 0

    if args.command == "search":
        asyncio.run(
            _search_async(
                settings,
                manifest=args.manifest,
                section=args.section,
                query=args.query,
            )
        )
        return 0

    if args.command == "suggest":
        asyncio.run(_suggest_async(settings, manifest=args.manifest, query=args.query))
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
