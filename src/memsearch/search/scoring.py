"""TF-IDF relevance scoring against the weighted index."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import math

from memsearch.search.idf_cache import TokenIdfCache
from memsearch.search.models import Document, Uid
from memsearch.search.token_index import InvertedIndexStore


def calculate_idf(documents_with_token: int, total_documents: int) -> float:
    """Return ``1 + ln(N / (1 + df))``.

    An empty collection has no defined IDF and yields 0.
    """

    if total_documents <= 0:
        return 0.0
    return 1 + math.log(total_documents / (1 + documents_with_token))


class TfIdfScorer:
    """Scores documents for a token list using term counts and cached IDF.

    Scores are not normalized by document length, so a document repeating a
    query token scores higher than one mentioning it once.
    """

    def __init__(
        self,
        store: InvertedIndexStore,
        idf_cache: TokenIdfCache,
        *,
        collection_size: Callable[[], int],
        uid_of: Callable[[Document], Uid | None],
    ) -> None:
        self._store = store
        self._idf_cache = idf_cache
        self._collection_size = collection_size
        self._uid_of = uid_of

    def idf(self, token: str) -> float:
        return self._idf_cache.get_or_compute(
            token,
            lambda key: calculate_idf(self._store.documents_count(key), self._collection_size()),
        )

    def score(self, tokens: Sequence[str], document: Document) -> float:
        uid = self._uid_of(document)
        total = 0.0
        for token in tokens:
            idf = self.idf(token)
            if idf == math.inf:
                idf = 0.0
            term_frequency = self._store.token_count(token, uid) if uid is not None else 0
            total += term_frequency * idf
        return total
