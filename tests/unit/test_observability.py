"""Unit tests for logging, tracing and metrics wiring."""

import json
import logging

from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode
from prometheus_client import REGISTRY
import pytest

from memsearch import Search
from memsearch.bootstrap import configure_observability
from memsearch.config import SearchSettings
from memsearch.observability import (
    JsonFormatter,
    configure_logging,
    create_span,
    get_metrics,
    get_trace_context,
    init_tracing,
    reset_metrics,
    reset_tracer,
    set_trace_context,
)
from memsearch.search.idf_cache import TokenIdfCache


def _record(msg: str = "indexed", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="memsearch.search.engine",
        level=logging.INFO,
        pathname="engine.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def span_exporter():
    exporter = InMemorySpanExporter()
    init_tracing(span_processors=[SimpleSpanProcessor(exporter)])
    yield exporter
    reset_tracer()


@pytest.fixture
def metric_reader():
    reset_metrics()
    reader = InMemoryMetricReader()
    yield reader
    reset_metrics()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestJsonFormatter:
    def test_includes_trace_context_and_component(self):
        set_trace_context("a" * 32, "b" * 16)

        payload = json.loads(JsonFormatter().format(_record()))

        assert payload["message"] == "indexed"
        assert payload["trace_id"] == "a" * 32
        assert payload["span_id"] == "b" * 16
        assert payload["component"] == "engine"
        assert payload["level"] == "INFO"

    def test_redacts_sensitive_extras(self):
        payload = json.loads(JsonFormatter().format(_record(api_key="secret-value", field="title")))

        assert payload["api_key"] == "[REDACTED]"
        assert payload["field"] == "title"

    def test_truncates_long_messages(self):
        payload = json.loads(JsonFormatter().format(_record("x" * 3000)))

        assert len(payload["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3

    def test_serializes_sets(self):
        payload = json.loads(JsonFormatter().format(_record(fields={"title", "body"})))

        assert payload["fields"] == ["body", "title"]


@pytest.mark.unit
class TestConfigureLogging:
    def test_installs_single_json_handler(self, restore_root_logger):
        configure_logging("debug", logger_levels={"memsearch.search": "warning"})

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("memsearch.search").level == logging.WARNING

    def test_plain_text_output(self, restore_root_logger):
        configure_logging("info", json_output=False)

        assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_bootstrap_applies_settings(self, restore_root_logger):
        settings = configure_observability(SearchSettings(log_level="warning", log_json=False))

        assert settings.log_level == "warning"
        assert restore_root_logger.level == logging.WARNING


@pytest.mark.unit
class TestTracing:
    def test_search_and_indexing_emit_spans(self, span_exporter, fox_documents):
        search = Search("id")
        search.add_searchable_field("text")
        search.add_documents(fox_documents)
        search.search("fox")

        spans = {span.name: span for span in span_exporter.get_finished_spans()}
        assert {"memsearch.add_searchable_field", "memsearch.add_documents", "memsearch.search"} <= set(spans)
        assert spans["memsearch.search"].attributes["memsearch.result_count"] == 2
        assert spans["memsearch.add_documents"].attributes["memsearch.document_count"] == 2

    def test_create_span_records_errors(self, span_exporter):
        with pytest.raises(RuntimeError), create_span("failing"):
            raise RuntimeError("boom")

        (span,) = span_exporter.get_finished_spans()
        assert span.status.status_code is StatusCode.ERROR

    def test_span_ids_reach_log_records_and_are_restored(self, span_exporter):
        set_trace_context("a" * 32, "b" * 16)

        with create_span("memsearch.search") as span:
            ctx = span.get_span_context()
            inside = dict(get_trace_context())
            payload = json.loads(JsonFormatter().format(_record()))

        assert inside == {"trace_id": format(ctx.trace_id, "032x"), "span_id": format(ctx.span_id, "016x")}
        assert payload["trace_id"] == inside["trace_id"]
        assert payload["span_id"] == inside["span_id"]
        assert get_trace_context() == {"trace_id": "a" * 32, "span_id": "b" * 16}

    def test_nested_span_restores_parent_ids(self, span_exporter):
        with create_span("parent") as parent:
            with create_span("child") as child:
                child_ids = dict(get_trace_context())
            parent_ids = dict(get_trace_context())

        assert child_ids["trace_id"] == parent_ids["trace_id"]
        assert child_ids["span_id"] == format(child.get_span_context().span_id, "016x")
        assert parent_ids["span_id"] == format(parent.get_span_context().span_id, "016x")


@pytest.mark.unit
class TestMetrics:
    def test_search_outcomes_are_counted(self, fox_documents):
        def sample(outcome: str) -> float:
            labels = {"mode": "weighted", "outcome": outcome}
            return REGISTRY.get_sample_value("memsearch_searches_total", labels) or 0.0

        search = Search("id")
        search.add_searchable_field("text")
        search.add_documents(fox_documents)
        hits, misses = sample("hit"), sample("miss")

        search.search("fox")
        search.search("zebra")

        assert sample("hit") == hits + 1
        assert sample("miss") == misses + 1

    def test_exposition_lists_index_counters(self, fox_documents):
        search = Search("id")
        search.add_searchable_field("text")
        search.add_documents(fox_documents)

        output = get_metrics().decode("utf-8")

        assert "memsearch_documents_indexed_total" in output
        assert "memsearch_tokens_indexed_total" in output

    def test_idf_cache_hits_and_misses_are_counted(self):
        def sample(result: str) -> float:
            return REGISTRY.get_sample_value("memsearch_idf_cache_lookups_total", {"result": result}) or 0.0

        cache = TokenIdfCache()
        hits, misses = sample("hit"), sample("miss")

        assert cache.get_or_compute("fox", lambda token: 1.5) == 1.5
        assert cache.get_or_compute("fox", lambda token: 9.0) == 1.5

        assert sample("miss") == misses + 1
        assert sample("hit") == hits + 1

    def test_bootstrap_exports_to_otel_reader_when_enabled(self, metric_reader, restore_root_logger, fox_documents):
        configure_observability(SearchSettings(metrics_enabled=True), metric_readers=[metric_reader])

        search = Search("id")
        search.add_searchable_field("text")
        search.add_documents(fox_documents)
        search.search("fox")

        data = metric_reader.get_metrics_data()
        names = {
            metric.name
            for resource_metrics in data.resource_metrics
            for scope_metrics in resource_metrics.scope_metrics
            for metric in scope_metrics.metrics
        }
        assert {
            "memsearch_searches_total",
            "memsearch_search_latency_seconds",
            "memsearch_documents_indexed_total",
            "memsearch_idf_cache_lookups_total",
        } <= names
