"""Search facade that owns the document collection and its inverted index.

Documents can be searched by any number of fields. Tokenizing, sanitizing,
token expansion and multi-token result merging are pluggable; the first
three, and the indexing mode, are fixed once the first document is indexed
because they determine the shape of the index.

Example::

    search = Search("id")
    search.add_searchable_field("title")
    search.add_documents([{"id": 1, "title": "The quick brown fox"}])
    search.search("quick")
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from memsearch.config import SearchSettings
from memsearch.errors import InvalidStateError
from memsearch.observability.metrics import (
    DOCUMENTS_INDEXED,
    SEARCH_COUNT,
    SEARCH_LATENCY,
    TOKENS_INDEXED,
    track_latency,
)
from memsearch.observability.tracing import create_span
from memsearch.search.idf_cache import TokenIdfCache
from memsearch.search.index_strategies import IndexStrategy, PrefixIndexStrategy, get_index_strategy
from memsearch.search.indexing import DocumentIndexer, FieldPath, document_uid, normalize_field_path
from memsearch.search.models import Document, IndexingReport, IndexMode, IndexStats
from memsearch.search.pruning import AllWordsMustMatchPruningStrategy, PruningStrategy, get_pruning_strategy
from memsearch.search.query import QueryEngine
from memsearch.search.sanitizers import LowerCaseSanitizer, Sanitizer, get_sanitizer
from memsearch.search.scoring import TfIdfScorer
from memsearch.search.token_index import InvertedIndexStore
from memsearch.search.tokenizers import SimpleTokenizer, Tokenizer, get_tokenizer


logger = logging.getLogger(__name__)


class Search:
    """In-memory full-text search over caller-supplied documents."""

    def __init__(
        self,
        uid_field: str,
        *,
        enable_tf_idf: bool = True,
        tokenizer: Tokenizer | None = None,
        sanitizer: Sanitizer | None = None,
        index_strategy: IndexStrategy | None = None,
        pruning_strategy: PruningStrategy | None = None,
    ) -> None:
        self._uid_field = uid_field
        self._mode = IndexMode.from_flag(enable_tf_idf)
        self._tokenizer: Tokenizer = tokenizer or SimpleTokenizer()
        self._sanitizer: Sanitizer = sanitizer or LowerCaseSanitizer()
        self._index_strategy: IndexStrategy = index_strategy or PrefixIndexStrategy()
        self._pruning_strategy: PruningStrategy = pruning_strategy or AllWordsMustMatchPruningStrategy()

        self._initialized = False
        self._documents: list[Document] = []
        self._searchable_fields: dict[FieldPath, None] = {}

        self._store = InvertedIndexStore()
        self._idf_cache = TokenIdfCache()
        self._indexer = DocumentIndexer(self._store, uid_field)
        self._scorer = TfIdfScorer(
            self._store,
            self._idf_cache,
            collection_size=lambda: len(self._documents),
            uid_of=lambda document: document_uid(document, self._uid_field),
        )
        self._query_engine = QueryEngine(self._store, self._scorer)

    @classmethod
    def from_settings(cls, uid_field: str, settings: SearchSettings) -> Search:
        """Build an engine whose collaborators are resolved from registry names."""
        return cls(
            uid_field,
            enable_tf_idf=settings.enable_tf_idf,
            tokenizer=get_tokenizer(settings.tokenizer, stop_words=settings.stop_words, stemming=settings.stemming),
            sanitizer=get_sanitizer(settings.sanitizer),
            index_strategy=get_index_strategy(settings.index_strategy),
            pruning_strategy=get_pruning_strategy(settings.pruning_strategy),
        )

    # Configuration -----------------------------------------------------

    def _ensure_configurable(self, setting: str) -> None:
        if self._initialized:
            raise InvalidStateError(setting)

    def set_mode(self, weighted: bool) -> None:
        """Select TF-IDF (weighted) or plain indexing. Only allowed before indexing."""
        self._ensure_configurable("TF-IDF mode")
        self._mode = IndexMode.from_flag(weighted)

    def set_tokenizer(self, tokenizer: Tokenizer) -> None:
        self._ensure_configurable("tokenizer")
        self._tokenizer = tokenizer

    def set_sanitizer(self, sanitizer: Sanitizer) -> None:
        self._ensure_configurable("sanitizer")
        self._sanitizer = sanitizer

    def set_index_strategy(self, index_strategy: IndexStrategy) -> None:
        self._ensure_configurable("index strategy")
        self._index_strategy = index_strategy

    def set_pruning_strategy(self, pruning_strategy: PruningStrategy) -> None:
        """Replace the pruning strategy. Allowed at any time."""
        self._pruning_strategy = pruning_strategy

    @property
    def enable_tf_idf(self) -> bool:
        return self._mode is IndexMode.WEIGHTED

    @enable_tf_idf.setter
    def enable_tf_idf(self, value: bool) -> None:
        self.set_mode(value)

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    @tokenizer.setter
    def tokenizer(self, value: Tokenizer) -> None:
        self.set_tokenizer(value)

    @property
    def sanitizer(self) -> Sanitizer:
        return self._sanitizer

    @sanitizer.setter
    def sanitizer(self, value: Sanitizer) -> None:
        self.set_sanitizer(value)

    @property
    def index_strategy(self) -> IndexStrategy:
        return self._index_strategy

    @index_strategy.setter
    def index_strategy(self, value: IndexStrategy) -> None:
        self.set_index_strategy(value)

    @property
    def pruning_strategy(self) -> PruningStrategy:
        return self._pruning_strategy

    @pruning_strategy.setter
    def pruning_strategy(self, value: PruningStrategy) -> None:
        self.set_pruning_strategy(value)

    # Read-only views ---------------------------------------------------

    @property
    def uid_field(self) -> str:
        return self._uid_field

    @property
    def mode(self) -> IndexMode:
        return self._mode

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._documents)

    @property
    def searchable_fields(self) -> tuple[FieldPath, ...]:
        return tuple(self._searchable_fields)

    def index_stats(self) -> IndexStats:
        return IndexStats(
            mode=self._mode,
            document_count=len(self._documents),
            searchable_field_count=len(self._searchable_fields),
            token_count=len(self._store.tokens(self._mode)),
            cached_idf_count=len(self._idf_cache),
        )

    # Indexing ----------------------------------------------------------

    def add_document(self, document: Document) -> None:
        """Add one document; it is indexed on every registered field."""
        self.add_documents([document])

    def add_documents(self, documents: Iterable[Document]) -> None:
        """Add documents; only the new ones are indexed, on every registered field."""
        new_documents = list(documents)
        self._documents.extend(new_documents)
        with create_span(
            "memsearch.add_documents",
            attributes={"memsearch.document_count": len(new_documents), "memsearch.mode": self._mode.value},
        ):
            self._index(new_documents, list(self._searchable_fields))

    def add_searchable_field(self, field: str | Sequence[str]) -> None:
        """Register a searchable field and index every existing document on it.

        ``field`` is a key or a sequence of keys into nested mappings.
        Registering the same field twice has no effect.
        """
        path = normalize_field_path(field)
        if path in self._searchable_fields:
            logger.debug("Field %s is already searchable", path)
            return
        self._searchable_fields[path] = None
        with create_span(
            "memsearch.add_searchable_field",
            attributes={"memsearch.field": str(path), "memsearch.document_count": len(self._documents)},
        ):
            self._index(self._documents, [path])

    add_index = add_searchable_field

    def _index(self, documents: Sequence[Document], fields: Sequence[FieldPath]) -> IndexingReport:
        self._idf_cache.clear()
        self._initialized = True

        report = self._indexer.index_documents(
            documents,
            fields,
            mode=self._mode,
            sanitizer=self._sanitizer,
            tokenizer=self._tokenizer,
            index_strategy=self._index_strategy,
        )

        mode = self._mode.value
        DOCUMENTS_INDEXED.labels(mode=mode, status="indexed").inc(report.documents_indexed)
        if report.documents_skipped:
            DOCUMENTS_INDEXED.labels(mode=mode, status="skipped").inc(report.documents_skipped)
        TOKENS_INDEXED.labels(mode=mode).inc(report.tokens_written)
        logger.debug(
            "Indexed %d documents on %d fields (%d skipped, %d tokens)",
            report.documents_indexed,
            len(fields),
            report.documents_skipped,
            report.tokens_written,
        )
        return report

    # Search ------------------------------------------------------------

    def search(self, query: str) -> list[Document]:
        """Return documents matching ``query``.

        Weighted mode sorts by descending TF-IDF score (ties unordered);
        plain mode returns matches in no particular order.
        """
        mode = self._mode.value
        with (
            create_span("memsearch.search", attributes={"memsearch.mode": mode}) as span,
            track_latency(SEARCH_LATENCY, mode=mode),
        ):
            tokens = self._tokenizer.tokenize(self._sanitizer.sanitize(query or ""))
            results = self._query_engine.execute(tokens, mode=self._mode, pruning_strategy=self._pruning_strategy)
            span.set_attribute("memsearch.token_count", len(tokens))
            span.set_attribute("memsearch.result_count", len(results))

        SEARCH_COUNT.labels(mode=mode, outcome="hit" if results else "miss").inc()
        return results
