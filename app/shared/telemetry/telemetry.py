"""OpenTelemetry tracing for the content cache service.

Spans cover incoming requests (FastAPI), cache commands (Redis) and the
explicit @traced spans around Strapi calls and invalidation. Log records get
trace_id/span_id injected so a webhook's log lines can be tied to its trace.

Enabled with TELEMETRY_ENABLED; the lifespan keeps the instance on
app.state.telemetry and shuts it down last.
"""

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from app.core.config import Settings

logger = logging.getLogger(__name__)

# Probes hit these every few seconds; their spans are noise
_UNTRACED_URLS = "/api/health,/api/health/ready"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Return the span exporter for TELEMETRY_EXPORTER, or None for "none"."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://"))
        logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT, using console")
    elif exporter_type != "console":
        logger.warning("Unknown exporter type %r, using console", exporter_type)
    return ConsoleSpanExporter()


class Telemetry:
    """Tracer provider plus FastAPI, Redis and logging instrumentation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None

    def start(self, app: FastAPI) -> bool:
        """Install the global tracer provider and instrument app, Redis and logging.

        Returns:
            True when tracing is active. Failures are logged and leave the
            service running untraced.
        """
        s = self.settings
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: s.app_name,
                        SERVICE_VERSION: s.app_version,
                        "deployment.environment": s.telemetry_environment,
                    }
                ),
                sampler=ParentBased(TraceIdRatioBased(s.telemetry_sample_rate)),
            )
            exporter = _build_exporter(s.telemetry_exporter, s.telemetry_otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
            self.tracer_provider = provider

            FastAPIInstrumentor.instrument_app(app, tracer_provider=provider, excluded_urls=_UNTRACED_URLS)
            RedisInstrumentor().instrument(tracer_provider=provider)
            LoggingInstrumentor().instrument(tracer_provider=provider, set_logging_format=False)
        except Exception:
            logger.exception("Failed to initialize telemetry; continuing without tracing")
            return False

        logger.info(
            "Tracing enabled: service=%s exporter=%s sample_rate=%s",
            s.app_name,
            s.telemetry_exporter,
            s.telemetry_sample_rate,
        )
        return True

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.tracer_provider = None
