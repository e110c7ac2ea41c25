from __future__ import annotations

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from learn_python.config import Settings

logger = structlog.get_logger(__name__)

_PROVIDER: TracerProvider | None = None


def configure_tracing(settings: Settings) -> bool:
    """Install an OTLP-exporting tracer provider when an endpoint is configured.

    Without OTEL_EXPORTER_OTLP_ENDPOINT the global no-op tracer stays in place.
    Returns True when export was enabled.
    """

    global _PROVIDER
    if _PROVIDER is not None:
        return True

    if not settings.tracing_enabled:
        logger.info("tracing_disabled", reason="OTEL_EXPORTER_OTLP_ENDPOINT not set")
        return False

    endpoint = settings.otel_endpoint.strip()
    try:
        resource = Resource.create(
            {
                SERVICE_NAME: settings.otel_service_name,
                SERVICE_VERSION: settings.app_version,
            }
        )
        provider = TracerProvider(resource=resource)
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    except Exception as exc:  # noqa: BLE001
        logger.warning("tracing_setup_failed", endpoint=endpoint, error=str(exc))
        return False

    trace.set_tracer_provider(provider)
    _PROVIDER = provider
    logger.info("tracing_enabled", endpoint=endpoint)
    return True


def get_tracer() -> trace.Tracer:
    return trace.get_tracer("learn_python")


def shutdown_tracing() -> None:
    global _PROVIDER
    if _PROVIDER is None:
        return
    _PROVIDER.shutdown()
    _PROVIDER = None
