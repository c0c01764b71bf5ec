"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from memsearch.observability.context import get_trace_context, set_trace_context
from memsearch.observability.logging import JsonFormatter, configure_logging
from memsearch.observability.metrics import (
    DOCUMENTS_INDEXED,
    IDF_CACHE_LOOKUPS,
    SEARCH_COUNT,
    SEARCH_LATENCY,
    TOKENS_INDEXED,
    get_metrics,
    init_metrics,
    reset_metrics,
    track_latency,
)
from memsearch.observability.tracing import create_span, get_tracer, init_tracing, reset_tracer


__all__ = [
    "DOCUMENTS_INDEXED",
    "IDF_CACHE_LOOKUPS",
    "SEARCH_COUNT",
    "SEARCH_LATENCY",
    "TOKENS_INDEXED",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "reset_metrics",
    "reset_tracer",
    "set_trace_context",
    "track_latency",
]
