"""Query execution over the inverted index."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from memsearch.search.models import Document, IndexMode
from memsearch.search.pruning import PruningStrategy
from memsearch.search.scoring import TfIdfScorer
from memsearch.search.token_index import InvertedIndexStore


logger = logging.getLogger(__name__)


class QueryEngine:
    """Looks up per-token candidates, prunes them, and orders the survivors."""

    def __init__(self, store: InvertedIndexStore, scorer: TfIdfScorer) -> None:
        self._store = store
        self._scorer = scorer

    def execute(
        self,
        tokens: Sequence[str],
        *,
        mode: IndexMode,
        pruning_strategy: PruningStrategy,
    ) -> list[Document]:
        if mode is IndexMode.WEIGHTED:
            return self._search_weighted(tokens, pruning_strategy)
        return self._search_plain(tokens, pruning_strategy)

    def _search_plain(self, tokens: Sequence[str], pruning_strategy: PruningStrategy) -> list[Document]:
        # Result order follows the merged map and carries no meaning.
        candidate_maps = [self._store.plain_candidates(token) for token in tokens]
        merged = pruning_strategy.prune(candidate_maps)
        return list(merged.values())

    def _search_weighted(self, tokens: Sequence[str], pruning_strategy: PruningStrategy) -> list[Document]:
        candidate_maps = [self._store.weighted_candidates(token) for token in tokens]
        merged = pruning_strategy.prune(candidate_maps)
        documents = [token_document.document for token_document in merged.values()]
        if len(documents) < 2:
            return documents

        scores = [self._scorer.score(tokens, document) for document in documents]
        order = sorted(range(len(documents)), key=scores.__getitem__, reverse=True)
        logger.debug("Ranked %d documents for %d tokens", len(order), len(tokens))
        return [documents[position] for position in order]
