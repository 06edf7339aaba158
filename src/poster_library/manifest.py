"""Manifest loading from local files or a static HTTP location."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .config import Settings
from .metrics import record_manifest_load
from .models import Manifest

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when the manifest cannot be read or parsed."""


def parse_manifest(payload: Any) -> Manifest:
    try:
        return Manifest.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest: {exc.error_count()} error(s)") from exc


class ManifestStore:
    """Load the manifest from a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Manifest:
        if not self._path.exists():
            raise ManifestError(f"Manifest not found: {self._path}")
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise ManifestError(f"Unreadable manifest {self._path}: {exc}") from exc
        return parse_manifest(payload)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


class ManifestFetcher:
    """Fetch the manifest over HTTP, bypassing intermediate caches."""

    def __init__(
        self,
        settings: Settings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if settings.manifest_url is None:
            raise ManifestError("No manifest_url configured")
        self._settings = settings
        self._url = str(settings.manifest_url)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.timeout_seconds,
            headers={"User-Agent": settings.user_agent},
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _params(self) -> dict[str, str]:
        timestamp = str(int(time.time() * 1000))
        return {"ts": timestamp, "v": self._settings.version or timestamp}

    @retry(
        retry=retry_if_exception(_is_transient),
        wait=wait_exponential(multiplier=1, min=1, max=6),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    async def _get(self) -> httpx.Response:
        response = await self._client.get(
            self._url,
            params=self._params(),
            headers={"Cache-Control": "no-store"},
        )
        response.raise_for_status()
        return response

    async def fetch(self) -> Manifest:
        """Fetch and validate the manifest."""

        start = time.perf_counter()
        try:
            response = await self._get()
            manifest = parse_manifest(response.json())
        except (httpx.HTTPError, ValueError, ManifestError) as exc:
            record_manifest_load(
                "http", outcome="error", duration_seconds=time.perf_counter() - start
            )
            if isinstance(exc, ManifestError):
                raise
            raise ManifestError(f"Fetch failed: {self._url}: {exc}") from exc
        record_manifest_load(
            "http", outcome="success", duration_seconds=time.perf_counter() - start
        )
        return manifest


@dataclass
class ManifestLoad:
    """Outcome of a load attempt; ``error`` is set when the fallback was used."""

    manifest: Manifest = field(default_factory=Manifest)
    source: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _load_file(path: Path) -> Manifest:
    start = time.perf_counter()
    try:
        manifest = ManifestStore(path).load()
    except ManifestError:
        record_manifest_load(
            "file", outcome="error", duration_seconds=time.perf_counter() - start
        )
        raise
    record_manifest_load(
        "file", outcome="success", duration_seconds=time.perf_counter() - start
    )
    return manifest


async def load_manifest(
    settings: Settings,
    *,
    path: Path | None = None,
    client: httpx.AsyncClient | None = None,
) -> ManifestLoad:
    """Load the manifest, falling back to an empty catalog on any failure.

    An explicit ``path`` wins over ``settings.manifest_url``, which wins over
    ``settings.manifest_path``.
    """

    if path is None and settings.manifest_url is not None:
        source = str(settings.manifest_url)
        fetcher = ManifestFetcher(settings, client=client)
        try:
            manifest = await fetcher.fetch()
        except ManifestError as exc:
            logger.warning("manifest_load_failed source=%s error=%s", source, exc, exc_info=exc)
            return ManifestLoad(source=source, error=str(exc))
        finally:
            await fetcher.close()
    else:
        target = path or settings.manifest_path
        source = str(target)
        try:
            manifest = await asyncio.to_thread(_load_file, target)
        except ManifestError as exc:
            logger.warning("manifest_load_failed source=%s error=%s", source, exc)
            return ManifestLoad(source=source, error=str(exc))

    logger.info("manifest_loaded items=%d source=%s", len(manifest.items), source)
    return ManifestLoad(manifest=manifest, source=source)
