"""Shared test fixtures and configuration."""

from __future__ import annotations

import os

import pytest


TEST_ENV = {
    "MEMSEARCH_ENABLE_TF_IDF": "true",
    "MEMSEARCH_TOKENIZER": "simple",
    "MEMSEARCH_SANITIZER": "lower-case",
    "MEMSEARCH_INDEX_STRATEGY": "prefix",
    "MEMSEARCH_PRUNING_STRATEGY": "all-words",
    "MEMSEARCH_STOP_WORDS": "false",
    "MEMSEARCH_STEMMING": "false",
    "MEMSEARCH_LOG_LEVEL": "info",
    "MEMSEARCH_LOG_JSON": "true",
    "MEMSEARCH_TRACING_ENABLED": "false",
    "MEMSEARCH_METRICS_ENABLED": "false",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value

from memsearch.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin MEMSEARCH_* variables and drop cached settings around each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fox_documents():
    """Two short documents sharing the token 'fox'."""
    return [
        {"id": 1, "text": "The quick brown fox"},
        {"id": 2, "text": "The lazy fox"},
    ]


@pytest.fixture
def books():
    """Small catalogue with nested author records."""
    return [
        {
            "isbn": "9780141439518",
            "title": "Pride and Prejudice",
            "author": {"name": "Jane Austen"},
            "pages": 432,
        },
        {
            "isbn": "9780141439587",
            "title": "Emma",
            "author": {"name": "Jane Austen"},
            "pages": 474,
        },
        {
            "isbn": "9780486280615",
            "title": "The Adventures of Huckleberry Finn",
            "author": {"name": "Mark Twain"},
            "pages": 224,
        },
        {
            "isbn": "9780743273565",
            "title": "The Great Gatsby",
            "author": {"name": "F. Scott Fitzgerald"},
            "pages": 180,
        },
    ]
