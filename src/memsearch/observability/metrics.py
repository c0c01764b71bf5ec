"""Prometheus metrics for indexing and search, mirrored to OpenTelemetry instruments."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.resources import Resource
from prometheus_client import Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


_meter_holder: dict[str, Any] = {"meter": None, "provider": None}
_bridges: list[MetricBridge] = []


def init_metrics(
    service_name: str = "memsearch",
    resource_attributes: dict[str, str] | None = None,
    metric_readers: list[MetricReader] | None = None,
) -> MeterProvider:
    """Initialize OpenTelemetry metrics.

    Instruments created before this call are rebound to the new meter on
    their next use.
    """
    provider = _meter_holder.get("provider")
    if isinstance(provider, MeterProvider):
        return provider

    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    resource = Resource.create(attributes)
    provider = MeterProvider(resource=resource, metric_readers=metric_readers or [])
    otel_metrics.set_meter_provider(provider)
    _meter_holder["provider"] = provider
    _meter_holder["meter"] = provider.get_meter(__name__)
    _drop_otel_instruments()
    return provider


def reset_metrics() -> None:
    """Shut down the installed meter provider and forget the cached meter."""
    provider = _meter_holder.get("provider")
    if isinstance(provider, MeterProvider):
        provider.shutdown()
    _meter_holder["provider"] = None
    _meter_holder["meter"] = None
    _drop_otel_instruments()


def _drop_otel_instruments() -> None:
    for bridge in _bridges:
        bridge._otel_instrument = None


def _get_meter():
    meter = _meter_holder.get("meter")
    if meter is None:
        meter = otel_metrics.get_meter(__name__)
        _meter_holder["meter"] = meter
    return meter


class _BoundMetric:
    def __init__(self, wrapper: MetricBridge, labels: dict[str, str]) -> None:
        self._wrapper = wrapper
        self._labels = labels
        self._prom_child = wrapper._prom_metric.labels(**labels)

    def inc(self, amount: float = 1.0) -> None:
        self._prom_child.inc(amount)
        self._wrapper._ensure_otel_instrument().add(amount, self._labels)

    def observe(self, value: float) -> None:
        self._prom_child.observe(value)
        self._wrapper._ensure_otel_instrument().record(value, self._labels)


class MetricBridge:
    """Bridge Prometheus metrics to OTel instruments."""

    def __init__(
        self,
        prom_metric: Counter | Histogram,
        *,
        otel_name: str,
        otel_description: str,
        otel_kind: str,
    ) -> None:
        self._prom_metric = prom_metric
        self._otel_name = otel_name
        self._otel_description = otel_description
        self._otel_kind = otel_kind
        self._otel_instrument = None
        _bridges.append(self)

    def labels(self, **labels: str) -> _BoundMetric:
        return _BoundMetric(self, labels)

    def _ensure_otel_instrument(self):
        if self._otel_instrument is not None:
            return self._otel_instrument
        meter = _get_meter()
        if self._otel_kind == "counter":
            self._otel_instrument = meter.create_counter(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "histogram":
            self._otel_instrument = meter.create_histogram(self._otel_name, description=self._otel_description)
        else:
            raise ValueError(f"Unknown metric kind: {self._otel_kind}")
        return self._otel_instrument


_SEARCH_LATENCY_PROM = Histogram(
    "memsearch_search_latency_seconds",
    "Search query latency",
    ["mode"],
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

_SEARCH_COUNT_PROM = Counter(
    "memsearch_searches_total",
    "Total searches executed",
    ["mode", "outcome"],
)

_DOCUMENTS_INDEXED_PROM = Counter(
    "memsearch_documents_indexed_total",
    "Documents passed through an indexing pass",
    ["mode", "status"],
)

_TOKENS_INDEXED_PROM = Counter(
    "memsearch_tokens_indexed_total",
    "Expanded tokens written to the inverted index",
    ["mode"],
)

_IDF_CACHE_LOOKUPS_PROM = Counter(
    "memsearch_idf_cache_lookups_total",
    "Inverse document frequency cache lookups",
    ["result"],
)

SEARCH_LATENCY = MetricBridge(
    _SEARCH_LATENCY_PROM,
    otel_name="memsearch_search_latency_seconds",
    otel_description="Search query latency",
    otel_kind="histogram",
)

SEARCH_COUNT = MetricBridge(
    _SEARCH_COUNT_PROM,
    otel_name="memsearch_searches_total",
    otel_description="Total searches executed",
    otel_kind="counter",
)

DOCUMENTS_INDEXED = MetricBridge(
    _DOCUMENTS_INDEXED_PROM,
    otel_name="memsearch_documents_indexed_total",
    otel_description="Documents passed through an indexing pass",
    otel_kind="counter",
)

TOKENS_INDEXED = MetricBridge(
    _TOKENS_INDEXED_PROM,
    otel_name="memsearch_tokens_indexed_total",
    otel_description="Expanded tokens written to the inverted index",
    otel_kind="counter",
)

IDF_CACHE_LOOKUPS = MetricBridge(
    _IDF_CACHE_LOOKUPS_PROM,
    otel_name="memsearch_idf_cache_lookups_total",
    otel_description="Inverse document frequency cache lookups",
    otel_kind="counter",
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()
