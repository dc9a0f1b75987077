"""OpenTelemetry tracing for the retry poller.

When enabled, spans for every retry cycle are exported via gRPC OTLP. The
poller always goes through ``opentelemetry.trace``, which stays a no-op until
``init_telemetry`` installs a provider.
"""

import logging
import os
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Configuration from environment
OTEL_ENABLED = os.getenv("OTEL_ENABLED", "false").lower() == "true"
OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "create-retry")
OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")


def resource_attributes(console_url: str | None = None) -> dict[str, str]:
    """Resource attributes identifying which console this run is retrying against."""
    attributes = {
        "service.name": OTEL_SERVICE_NAME,
        "deployment.environment": os.getenv("ENVIRONMENT", "development"),
    }
    if console_url:
        parsed = urlparse(console_url)
        attributes["create_retry.console.host"] = parsed.netloc
        attributes["create_retry.console.path"] = parsed.path or "/"
    return attributes


def init_telemetry(console_url: str | None = None) -> bool:
    """Install a tracer provider with an OTLP exporter if enabled.

    Returns True when tracing was initialized.
    """
    if not OTEL_ENABLED:
        logger.debug("OpenTelemetry tracing disabled (OTEL_ENABLED=false)")
        return False

    if not OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.warning(
            "OTEL_ENABLED=true but OTEL_EXPORTER_OTLP_ENDPOINT not set. "
            "Skipping OpenTelemetry initialization."
        )
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor

        resource = Resource.create(resource_attributes(console_url))
        provider = TracerProvider(resource=resource)
        exporter = OTLPSpanExporter(endpoint=OTEL_EXPORTER_OTLP_ENDPOINT, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)

        logger.info(
            f"OpenTelemetry initialized: service={OTEL_SERVICE_NAME}, "
            f"endpoint={OTEL_EXPORTER_OTLP_ENDPOINT}, "
            f"console={resource.attributes.get('create_retry.console.host', '-')}"
        )
        return True

    except ImportError as e:
        logger.error(
            f"OpenTelemetry packages not installed: {e}. "
            "Install with: pip install 'create-retry[telemetry]'"
        )
    except Exception as e:
        logger.error(f"Failed to initialize OpenTelemetry: {e}")
    return False


def shutdown_telemetry() -> None:
    """Flush and shut down the tracer provider."""
    if not OTEL_ENABLED:
        return

    try:
        from opentelemetry import trace

        provider = trace.get_tracer_provider()
        if hasattr(provider, "shutdown"):
            provider.shutdown()
            logger.info("OpenTelemetry tracer provider shut down")
    except Exception as e:
        logger.warning(f"Error shutting down OpenTelemetry: {e}")
