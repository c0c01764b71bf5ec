"""Indexing pass that feeds document fields into the inverted index store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import Any

from memsearch.search.index_strategies import IndexStrategy
from memsearch.search.models import Document, IndexingReport, IndexMode, Uid
from memsearch.search.sanitizers import Sanitizer
from memsearch.search.token_index import InvertedIndexStore
from memsearch.search.tokenizers import Tokenizer


logger = logging.getLogger(__name__)

FieldPath = str | tuple[str, ...]


def normalize_field_path(field: str | Sequence[str]) -> FieldPath:
    """Return a hashable field path; a one-element sequence collapses to its key."""

    if isinstance(field, str):
        return field
    path = tuple(field)
    if not path:
        raise ValueError("Field path must contain at least one key")
    return path[0] if len(path) == 1 else path


def resolve_field(document: Document, field: FieldPath) -> Any:
    """Return the value at ``field`` or ``None`` when any key along the path is missing."""

    if isinstance(field, str):
        return document.get(field) if isinstance(document, Mapping) else None
    value: Any = document
    for key in field:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def document_uid(document: Document, uid_field: str) -> Uid | None:
    """Return the document's uid, or ``None`` if it is missing or unhashable."""

    if not isinstance(document, Mapping):
        return None
    uid = document.get(uid_field)
    if uid is None:
        return None
    try:
        hash(uid)
    except TypeError:
        return None
    return uid


class DocumentIndexer:
    """Writes expanded tokens for (document, field) pairs into a store."""

    def __init__(self, store: InvertedIndexStore, uid_field: str) -> None:
        self.store = store
        self.uid_field = uid_field

    def index_documents(
        self,
        documents: Iterable[Document],
        fields: Sequence[FieldPath],
        *,
        mode: IndexMode,
        sanitizer: Sanitizer,
        tokenizer: Tokenizer,
        index_strategy: IndexStrategy,
    ) -> IndexingReport:
        """Index ``fields`` of ``documents`` only; nothing else is rescanned."""

        documents_seen = 0
        documents_skipped = 0
        tokens_written = 0

        for document in documents:
            documents_seen += 1
            uid = document_uid(document, self.uid_field)
            if uid is None:
                documents_skipped += 1
                logger.debug("Skipping document without a usable '%s' value", self.uid_field)
                continue

            for field in fields:
                value = resolve_field(document, field)
                if not isinstance(value, str):
                    continue
                for token in tokenizer.tokenize(sanitizer.sanitize(value)):
                    for expanded in index_strategy.expand_token(token):
                        self.store.add(mode, expanded, uid, document)
                        tokens_written += 1

        return IndexingReport(
            documents_seen=documents_seen,
            documents_skipped=documents_skipped,
            tokens_written=tokens_written,
        )
