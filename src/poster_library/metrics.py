"""Prometheus metrics helpers for the poster library."""

from __future__ import annotations

import threading

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_LOCK = threading.Lock()
_REGISTRY: CollectorRegistry | None = None

# Prometheus collectors (initialised lazily so tests can reset the registry)
_MANIFEST_LOAD_COUNTER: Counter
_MANIFEST_LOAD_SECONDS: Histogram
_QUERY_COUNTER: Counter
_QUERY_RESULTS: Histogram
_HTTP_REQUEST_COUNTER: Counter
_HTTP_REQUEST_LATENCY_SECONDS: Histogram


def _initialise_registry() -> None:
    global _REGISTRY
    global _MANIFEST_LOAD_COUNTER, _MANIFEST_LOAD_SECONDS
    global _QUERY_COUNTER, _QUERY_RESULTS
    global _HTTP_REQUEST_COUNTER, _HTTP_REQUEST_LATENCY_SECONDS

    registry = CollectorRegistry()

    _MANIFEST_LOAD_COUNTER = Counter(
        "poster_manifest_loads_total",
        "Manifest load attempts grouped by source and outcome.",
        ["source", "outcome"],
        registry=registry,
    )
    _MANIFEST_LOAD_SECONDS = Histogram(
        "poster_manifest_load_seconds",
        "Time spent loading the manifest.",
        ["source"],
        registry=registry,
    )
    _QUERY_COUNTER = Counter(
        "poster_queries_total",
        "Grid filter and suggestion computations.",
        ["kind"],
        registry=registry,
    )
    _QUERY_RESULTS = Histogram(
        "poster_query_results",
        "Number of items returned per computation.",
        ["kind"],
        buckets=(0, 1, 2, 4, 8, 16, 32, 64, 128, 256),
        registry=registry,
    )
    _HTTP_REQUEST_COUNTER = Counter(
        "poster_http_requests_total",
        "HTTP requests handled by the library server.",
        ["method", "path", "status"],
        registry=registry,
    )
    _HTTP_REQUEST_LATENCY_SECONDS = Histogram(
        "poster_http_request_seconds",
        "HTTP handler latency for the library server.",
        ["method", "path"],
        registry=registry,
    )

    _REGISTRY = registry


def _ensure_registry() -> None:
    if _REGISTRY is None:
        with _LOCK:
            if _REGISTRY is None:
                _initialise_registry()


def record_manifest_load(source: str, *, outcome: str, duration_seconds: float) -> None:
    """Record a manifest load from ``file`` or ``http``."""

    _ensure_registry()
    _MANIFEST_LOAD_COUNTER.labels(source=source, outcome=outcome).inc()
    _MANIFEST_LOAD_SECONDS.labels(source=source).observe(duration_seconds)


def record_query(kind: str, result_count: int) -> None:
    """Record a ``filter`` or ``suggest`` computation and its result size."""

    _ensure_registry()
    _QUERY_COUNTER.labels(kind=kind).inc()
    _QUERY_RESULTS.labels(kind=kind).observe(result_count)


def record_http_request(
    method: str,
    path: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record an HTTP request handled by the library server."""

    _ensure_registry()
    _HTTP_REQUEST_COUNTER.labels(
        method=method,
        path=path,
        status=str(status_code),
    ).inc()
    _HTTP_REQUEST_LATENCY_SECONDS.labels(method=method, path=path).observe(duration_seconds)


def metrics_payload() -> tuple[bytes, str]:
    """Return the Prometheus metrics payload and content type."""

    _ensure_registry()
    return generate_latest(_REGISTRY or CollectorRegistry()), CONTENT_TYPE_LATEST


def reset_metrics_for_tests() -> None:  # pragma: no cover - test utility
    """Reset the registry so tests can run with a clean state."""

    with _LOCK:
        _initialise_registry()
