"""Observability: structured logging and tracing."""

from job_scout_scraper.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from job_scout_scraper.observability.tracing import (
    configure_tracing,
    configure_tracing_with_exporter,
    disable_tracing,
    get_tracer,
    trace_domain,
    trace_scrape_run,
)

__all__ = [
    "bind_run_context",
    "clear_run_context",
    "configure_logging",
    "configure_tracing",
    "configure_tracing_with_exporter",
    "disable_tracing",
    "get_tracer",
    "trace_domain",
    "trace_scrape_run",
]
