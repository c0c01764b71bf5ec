"""Inverted index store holding the plain and weighted token maps.

Both representations live side by side; the engine's ``IndexMode`` decides
which one is written and read. Only one of them is ever populated for a
given engine because the mode is locked before the first write.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from memsearch.search.models import Document, IndexMode, TokenDocument, Uid, WeightedIndexEntry


_EMPTY: Mapping = MappingProxyType({})


class InvertedIndexStore:
    """Token keyed postings for one engine instance."""

    def __init__(self) -> None:
        self._plain: dict[str, dict[Uid, Document]] = {}
        self._weighted: dict[str, WeightedIndexEntry] = {}

    def add_plain(self, token: str, uid: Uid, document: Document) -> None:
        """Record ``document`` under ``token``. Re-adding overwrites in place."""
        self._plain.setdefault(token, {})[uid] = document

    def add_weighted(self, token: str, uid: Uid, document: Document) -> None:
        """Record one occurrence of ``token`` in ``document``."""
        entry = self._weighted.get(token)
        if entry is None:
            entry = WeightedIndexEntry(documents_count=0, total_token_count=1)
            self._weighted[token] = entry
        else:
            entry.total_token_count += 1

        token_document = entry.uid_to_document.get(uid)
        if token_document is None:
            entry.documents_count += 1
            entry.uid_to_document[uid] = TokenDocument(document=document, token_count=1)
        else:
            token_document.token_count += 1

    def add(self, mode: IndexMode, token: str, uid: Uid, document: Document) -> None:
        if mode is IndexMode.WEIGHTED:
            self.add_weighted(token, uid, document)
        else:
            self.add_plain(token, uid, document)

    def plain_candidates(self, token: str) -> Mapping[Uid, Document]:
        """Read-only ``uid -> document`` map for ``token`` (empty when unseen)."""
        candidates = self._plain.get(token)
        return MappingProxyType(candidates) if candidates is not None else _EMPTY

    def weighted_candidates(self, token: str) -> Mapping[Uid, TokenDocument]:
        """Read-only ``uid -> TokenDocument`` map for ``token`` (empty when unseen)."""
        entry = self._weighted.get(token)
        return MappingProxyType(entry.uid_to_document) if entry is not None else _EMPTY

    def weighted_entry(self, token: str) -> WeightedIndexEntry | None:
        return self._weighted.get(token)

    def documents_count(self, token: str) -> int:
        entry = self._weighted.get(token)
        return entry.documents_count if entry is not None else 0

    def token_count(self, token: str, uid: Uid) -> int:
        entry = self._weighted.get(token)
        if entry is None:
            return 0
        token_document = entry.uid_to_document.get(uid)
        return token_document.token_count if token_document is not None else 0

    def tokens(self, mode: IndexMode) -> list[str]:
        source = self._weighted if mode is IndexMode.WEIGHTED else self._plain
        return list(source)

    def __len__(self) -> int:
        return len(self._plain) + len(self._weighted)
