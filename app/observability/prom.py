# -*- coding: utf-8 -*-
"""
backend/app/observability/prom.py

Observabilidad Prometheus del backend de pagos.

- Middleware HTTP: conteo y latencia por método, plantilla de ruta y
  código de estado. /metrics y /health no se instrumentan para que el
  scraping y las sondas no dominen las series.
- Endpoint /metrics: métricas HTTP (registro global o multiproceso) seguidas
  del registro propio de pagos (payments.metrics).

Autor: Equipo Storefront
Fecha: 2026-10-05
"""
from __future__ import annotations

import os
from time import perf_counter
from typing import FrozenSet, Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from app.modules.payments.metrics.exporters.prometheus_exporter import render_prometheus_metrics

UNINSTRUMENTED_PATHS: FrozenSet[str] = frozenset({"/metrics", "/health"})

# path es la plantilla de la ruta (/payments/orders/{order_reference}/status),
# nunca la URL concreta: las referencias de orden no deben crear series.
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
HTTP_REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "Latency per request (s)",
    ["method", "path", "status"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNINSTRUMENTED_PATHS:
            return await call_next(request)

        start = perf_counter()
        response = await call_next(request)
        labels = (request.method, _route_template(request), str(response.status_code))
        HTTP_REQUEST_LATENCY.labels(*labels).observe(perf_counter() - start)
        HTTP_REQUESTS_TOTAL.labels(*labels).inc()
        return response


def _http_registry() -> CollectorRegistry:
    """Registro multiproceso si PROMETHEUS_MULTIPROC_DIR está definido (gunicorn/uvicorn workers)."""
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return registry
    return REGISTRY


def render_all_metrics(registry: Optional[CollectorRegistry] = None) -> bytes:
    return generate_latest(registry or _http_registry()) + render_prometheus_metrics()


def mount_metrics(app: FastAPI, path: str = "/metrics") -> None:
    registry = _http_registry()

    @app.get(path, include_in_schema=False)
    def metrics() -> Response:
        return Response(content=render_all_metrics(registry), media_type=CONTENT_TYPE_LATEST)


def setup_observability(app: FastAPI) -> None:
    """Agrega el middleware de Prometheus y monta /metrics."""
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)


__all__ = ["PrometheusMiddleware", "mount_metrics", "render_all_metrics", "setup_observability"]

# Fin del archivo backend/app/observability/prom.py
