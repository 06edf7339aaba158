"""HTTP entrypoint serving the catalog engine as a small JSON API."""

from __future__ import annotations

import argparse
import asyncio
import logging
import time
from typing import Awaitable, Callable

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .browse import BrowseState, CatalogSession, item_payload, suggestion_payload
from .config import Settings, get_settings
from .filters import ALL_SECTIONS
from .manifest import load_manifest
from .metrics import metrics_payload, record_http_request
from .sections import SectionLabeler

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]


async def create_session(settings: Settings) -> CatalogSession:
    """Load the manifest once and wrap it in a browse session."""

    result = await load_manifest(settings)
    return CatalogSession(
        result.manifest.items,
        SectionLabeler(settings.section_labels),
        load_error=result.error,
        suggestion_limit=settings.suggestion_limit,
        suggestion_min_length=settings.suggestion_min_length,
    )


def _state_from_request(request: Request) -> BrowseState:
    section = request.query_params.get("section") or ALL_SECTIONS
    return BrowseState(active_section=section, search_query=request.query_params.get("q", ""))


def _timed(path: str, endpoint: Endpoint) -> Endpoint:
    async def wrapper(request: Request) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await endpoint(request)
            status_code = response.status_code
            return response
        finally:
            record_http_request(
                request.method, path, status_code, time.perf_counter() - start
            )

    return wrapper


def build_http_app(session: CatalogSession, settings: Settings) -> Starlette:
    asset_base = settings.asset_base_url

    async def health_endpoint(_request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "items": len(session.items),
                "sections": len(session.sections()),
                "load_error": session.load_error,
            }
        )

    async def sections_endpoint(_request: Request) -> JSONResponse:
        return JSONResponse(
            {"sections": [section.model_dump() for section in session.sections()]}
        )

    async def items_endpoint(request: Request) -> JSONResponse:
        state = _state_from_request(request)
        items = session.filtered(state)
        return JSONResponse(
            {
                "section": state.active_section,
                "query": state.search_query,
                "count": len(items),
                "items": [item_payload(item, asset_base) for item in items],
            }
        )

    async def suggest_endpoint(request: Request) -> JSONResponse:
        query = request.query_params.get("q", "")
        suggestions = session.suggestions(query)
        return JSONResponse(
            {
                "query": query,
                "suggestions": [suggestion_payload(s, asset_base) for s in suggestions],
            }
        )

    async def view_endpoint(request: Request) -> JSONResponse:
        view = session.view(_state_from_request(request))
        return JSONResponse(view.to_dict(asset_base))

    async def metrics_endpoint(_request: Request) -> Response:
        payload, content_type = metrics_payload()
        return Response(payload, media_type=content_type)

    routes = [
        Route("/healthz", endpoint=_timed("healthz", health_endpoint), methods=["GET"]),
        Route("/api/sections", endpoint=_timed("sections", sections_endpoint), methods=["GET"]),
        Route("/api/items", endpoint=_timed("items", items_endpoint), methods=["GET"]),
        Route("/api/suggest", endpoint=_timed("suggest", suggest_endpoint), methods=["GET"]),
        Route("/api/view", endpoint=_timed("view", view_endpoint), methods=["GET"]),
        Route("/metrics", endpoint=metrics_endpoint, methods=["GET"]),
    ]
    return Starlette(routes=routes)


async def serve_http(
    settings: Settings,
    *,
    host: str,
    port: int,
    log_level: str,
) -> None:
    session = await create_session(settings)
    app = build_http_app(session, settings)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=log_level.lower(),
        loop="asyncio",
    )
    server = uvicorn.Server(config)
    logger.info("Starting poster library server on %s:%s", host, port)
    await server.serve()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the poster library HTTP server")
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host/IP to bind.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    asyncio.run(
        serve_http(
            get_settings(),
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
    )


if __name__ == "__main__":  # pragma: no cover
    main()
