from __future__ import annotations

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import get_logger

logger = get_logger("request")


class TraceLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with trace_id/span_id injected by the logging factory.
    """

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        logger.debug(
            "Incoming request",
            extra={"path": request.url.path, "method": request.method},
        )
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                exc_info=True,
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(exc),
                },
            )
            raise
        logger.info(
            "Completed request",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 3),
            },
        )
        return response
