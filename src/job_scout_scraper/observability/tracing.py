"""Optional OpenTelemetry spans around scrape runs and target domains."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from job_scout_core.config.settings import Settings

logger = structlog.get_logger()

# Module-level tracer, set by configure_tracing(); None while disabled.
_tracer: Any = None


def configure_tracing(settings: Settings) -> None:
    """Configure OpenTelemetry tracing based on settings.

    All OTEL imports are deferred so the default install never loads them.
    """
    if settings.otel_exporter == "none":
        disable_tracing()
        return

    from opentelemetry import trace

    if settings.otel_exporter == "console":
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter

        exporter: Any = ConsoleSpanExporter()
        batch = False
    else:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )

        exporter = OTLPSpanExporter(endpoint=settings.otel_endpoint)
        batch = True

    provider = configure_tracing_with_exporter(
        exporter, service_name=settings.otel_service_name, batch=batch
    )
    trace.set_tracer_provider(provider)
    logger.info("tracing_configured", exporter=settings.otel_exporter)


def configure_tracing_with_exporter(
    exporter: Any,  # noqa: ANN401
    *,
    service_name: str = "job-scout",
    batch: bool = False,
) -> Any:  # noqa: ANN401
    """Send run and domain spans to ``exporter`` and return the provider.

    Does not touch the global tracer provider, so tests can install an
    in-memory exporter repeatedly.
    """
    global _tracer

    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    processor = BatchSpanProcessor(exporter) if batch else SimpleSpanProcessor(exporter)
    provider.add_span_processor(processor)
    _tracer = provider.get_tracer("job-scout")
    return provider


def disable_tracing() -> None:
    """Drop the tracer so every span helper becomes a no-op."""
    global _tracer
    _tracer = None


def get_tracer() -> Any:  # noqa: ANN401
    """Return the active tracer, or None when tracing is disabled."""
    return _tracer


@contextmanager
def trace_scrape_run(run_id: str, query: str, domain_count: int) -> Iterator[Any]:
    """Root span for one scrape run. Yields the span, or None if disabled."""
    tracer = get_tracer()
    if tracer is None:
        yield None
        return

    with tracer.start_as_current_span("scrape.run") as span:
        span.set_attribute("scrape.run_id", run_id)
        span.set_attribute("scrape.query", query)
        span.set_attribute("scrape.domain_count", domain_count)
        yield span


@contextmanager
def trace_domain(domain: str) -> Iterator[Any]:
    """Child span for one target domain. Yields the span, or None if disabled."""
    tracer = get_tracer()
    if tracer is None:
        yield None
        return

    with tracer.start_as_current_span("scrape.domain") as span:
        span.set_attribute("scrape.domain", domain)
        yield span
