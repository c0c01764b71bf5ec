"""Per-token cache of inverse document frequencies."""

from __future__ import annotations

from collections.abc import Callable

from memsearch.observability.metrics import IDF_CACHE_LOOKUPS


_IDF_HITS = IDF_CACHE_LOOKUPS.labels(result="hit")
_IDF_MISSES = IDF_CACHE_LOOKUPS.labels(result="miss")


class TokenIdfCache:
    """Memoizes IDF values until the next indexing pass clears them.

    IDF depends on both the collection size and a token's document count, so
    any indexing pass invalidates every entry.
    """

    def __init__(self) -> None:
        self._values: dict[str, float] = {}

    def get_or_compute(self, token: str, compute: Callable[[str], float]) -> float:
        cached = self._values.get(token)
        if cached is not None:
            _IDF_HITS.inc()
            return cached
        _IDF_MISSES.inc()
        value = compute(token)
        self._values[token] = value
        return value

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, token: object) -> bool:
        return token in self._values

    def __len__(self) -> int:
        return len(self._values)
