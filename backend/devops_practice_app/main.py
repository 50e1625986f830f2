from __future__ import annotations

from fastapi import FastAPI

from .api.endpoints.demo import APP_VERSION
from .api.router import router as api_router
from .core.config import settings
from .observability import otel
from .observability.logging import get_logger, setup_logging
from .observability.metrics import MetricsMiddleware, metrics_router
from .observability.middleware import TraceLoggingMiddleware

logger = get_logger("main")


def create_app() -> FastAPI:
    """
    Application factory.

    - Sets up JSON logging with trace/span IDs
    - Configures OpenTelemetry tracing when enabled
    - Attaches HTTP middlewares (tracing logs, metrics)
    - Registers the /api routes and the metrics endpoint
    """
    setup_logging()

    app = FastAPI(
        title=settings.app.name,
        version=APP_VERSION,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    otel.init_otel(app)

    app.add_middleware(TraceLoggingMiddleware)

    if settings.metrics.enabled:
        app.add_middleware(MetricsMiddleware)
        # Metrics endpoint (root-level /metrics)
        app.include_router(metrics_router)

    app.include_router(api_router, prefix="/api")

    logger.info("Application created")
    return app


app = create_app()


def run() -> None:
    """Serve `app` with uvicorn using the configured bind address."""
    import uvicorn

    app_cfg = settings.app
    uvicorn.run(
        app,
        host=app_cfg.host,
        port=app_cfg.port,
        log_level=app_cfg.log_level.lower(),
    )


if __name__ == "__main__":
    run()
