from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_COUNTER = Counter(
    "devops_app_http_requests_total",
    "Total HTTP requests handled by the service",
    ["method", "path", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "devops_app_http_request_latency_seconds",
    "Latency of HTTP requests in seconds",
    ["method", "path"],
)

METRICS_PATH = "/metrics"
UNMATCHED_PATH = "<unmatched>"


def route_label(request: Request) -> str:
    """
    Path label for a served request: the matched route template, so that
    every URL hitting `/items/{id}` shares one series, or a single
    placeholder for requests no route matched (404s, scanners).
    """
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path if path else UNMATCHED_PATH


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Request count and latency per method and route template.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        latency = time.perf_counter() - start

        # The router fills scope["route"] during call_next.
        path = route_label(request)
        if path == METRICS_PATH:
            return response

        REQUEST_COUNTER.labels(
            method=request.method,
            path=path,
            status_code=response.status_code,
        ).inc()
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(latency)

        return response


metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get(METRICS_PATH)
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.
    """
    data: bytes = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
