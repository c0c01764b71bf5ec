"""Wire logging, tracing and metrics from settings."""

from __future__ import annotations

import logging

from opentelemetry.sdk.metrics.export import MetricReader

from memsearch.config import SearchSettings, get_settings
from memsearch.observability.logging import configure_logging
from memsearch.observability.metrics import init_metrics
from memsearch.observability.tracing import init_tracing


logger = logging.getLogger(__name__)


def configure_observability(
    settings: SearchSettings | None = None,
    *,
    metric_readers: list[MetricReader] | None = None,
) -> SearchSettings:
    """Apply logging, tracing and metrics settings and return the settings used.

    ``metric_readers`` are attached to the meter provider when metrics are
    enabled; Prometheus counters are always recorded.
    """
    active = settings or get_settings()
    configure_logging(active.log_level, json_output=active.log_json)
    if active.tracing_enabled:
        init_tracing()
    if active.metrics_enabled:
        init_metrics(metric_readers=metric_readers)
    logger.debug(
        "Observability configured (level=%s, json=%s, tracing=%s, metrics=%s)",
        active.log_level,
        active.log_json,
        active.tracing_enabled,
        active.metrics_enabled,
    )
    return active
