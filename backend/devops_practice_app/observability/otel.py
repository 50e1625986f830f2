from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter as GRPCSpanExporter,
)
from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
    OTLPSpanExporter as HTTPSpanExporter,
)
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter

from ..core.config import OTELSettings, settings
from .logging import get_logger

logger = get_logger("otel")

# Process-wide provider; OTel only accepts the first set_tracer_provider call.
_tracer_provider: Optional[TracerProvider] = None


def _build_exporter(otel_cfg: OTELSettings) -> SpanExporter:
    if otel_cfg.exporter_otlp_protocol == "http/protobuf":
        return HTTPSpanExporter(endpoint=otel_cfg.exporter_otlp_endpoint)
    return GRPCSpanExporter(
        endpoint=otel_cfg.exporter_otlp_endpoint,
        insecure=True,
    )


def _get_tracer_provider(otel_cfg: OTELSettings) -> TracerProvider:
    global _tracer_provider
    if _tracer_provider is not None:
        return _tracer_provider

    resource = Resource(
        attributes={
            "service.name": otel_cfg.service_name,
            "service.environment": settings.app.env.value,
        }
    )

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(_build_exporter(otel_cfg)))
    trace.set_tracer_provider(tracer_provider)

    _tracer_provider = tracer_provider
    return tracer_provider


def init_otel(app: FastAPI) -> bool:
    """
    Initialize OpenTelemetry tracing when enabled in settings.

    Traces are exported via OTLP (gRPC or HTTP/protobuf, per
    OTEL_EXPORTER_OTLP_PROTOCOL) to the collector configured by
    OTEL_EXPORTER_OTLP_ENDPOINT. The tracer provider is created once per
    process and shared by every app instrumented afterwards. Returns whether
    tracing was installed.
    """
    otel_cfg = settings.otel
    if not otel_cfg.enabled:
        logger.debug("OpenTelemetry tracing disabled")
        return False

    tracer_provider = _get_tracer_provider(otel_cfg)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider)
    logger.info("OpenTelemetry tracing enabled")
    return True
