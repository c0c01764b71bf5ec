"""Index strategies expand a single token into the keys it is indexed under.

Expansion happens at index time only. A prefix strategy lets the query
``"qu"`` match a document containing ``"quick"`` without any query rewriting.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol


class IndexStrategy(Protocol):
    """Protocol implemented by index strategies."""

    def expand_token(self, token: str) -> list[str]:  # pragma: no cover - interface definition
        ...


class ExactWordIndexStrategy:
    """Indexes a token under itself only."""

    def expand_token(self, token: str) -> list[str]:
        return [token] if token else []


class PrefixIndexStrategy:
    """Indexes a token under every non-empty prefix.

    ``"cat"`` expands to ``["c", "ca", "cat"]``.
    """

    def expand_token(self, token: str) -> list[str]:
        return [token[:end] for end in range(1, len(token) + 1)]


class AllSubstringsIndexStrategy:
    """Indexes a token under every contiguous substring.

    Duplicated substrings (``"aa"`` in ``"aaa"``) are emitted once.
    """

    def expand_token(self, token: str) -> list[str]:
        expanded: list[str] = []
        seen: set[str] = set()
        for start in range(len(token)):
            for end in range(start + 1, len(token) + 1):
                substring = token[start:end]
                if substring not in seen:
                    seen.add(substring)
                    expanded.append(substring)
        return expanded


_INDEX_STRATEGY_FACTORIES: dict[str, Callable[[], IndexStrategy]] = {
    "prefix": PrefixIndexStrategy,
    "exact": ExactWordIndexStrategy,
    "all-substrings": AllSubstringsIndexStrategy,
}


def available_index_strategies() -> Sequence[str]:
    return sorted(_INDEX_STRATEGY_FACTORIES)


def get_index_strategy(name: str | None) -> IndexStrategy:
    """Return index strategy by name, defaulting to prefix expansion."""

    normalized = (name or "prefix").lower()
    if normalized not in _INDEX_STRATEGY_FACTORIES:
        msg = f"Unknown index strategy '{name}'. Available: {available_index_strategies()}"
        raise ValueError(msg)
    return _INDEX_STRATEGY_FACTORIES[normalized]()
