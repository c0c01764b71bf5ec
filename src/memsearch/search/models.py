"""Search data models."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


Document = Mapping[str, Any]
Uid = Hashable


class IndexMode(str, Enum):
    """Indexing mode selected before the first document is indexed."""

    PLAIN = "plain"
    WEIGHTED = "weighted"

    @classmethod
    def from_flag(cls, weighted: bool) -> IndexMode:
        return cls.WEIGHTED if weighted else cls.PLAIN


@dataclass(slots=True)
class TokenDocument:
    """Occurrences of one token inside one document."""

    document: Document
    token_count: int = 1


@dataclass(slots=True)
class WeightedIndexEntry:
    """Weighted postings for a single token.

    ``documents_count`` always equals ``len(uid_to_document)`` and
    ``total_token_count`` equals the sum of every ``token_count``.
    """

    documents_count: int = 0
    total_token_count: int = 0
    uid_to_document: dict[Uid, TokenDocument] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class IndexingReport:
    """Outcome of a single indexing pass."""

    documents_seen: int
    documents_skipped: int
    tokens_written: int

    @property
    def documents_indexed(self) -> int:
        return self.documents_seen - self.documents_skipped


@dataclass(frozen=True, slots=True)
class IndexStats:
    """Read-only snapshot of an engine's index."""

    mode: IndexMode
    document_count: int
    searchable_field_count: int
    token_count: int
    cached_idf_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "document_count": self.document_count,
            "searchable_field_count": self.searchable_field_count,
            "token_count": self.token_count,
            "cached_idf_count": self.cached_idf_count,
        }
