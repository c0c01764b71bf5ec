"""Pruning strategies merge per-token candidate maps into one result map.

Each query token contributes one ``uid -> candidate`` map. The candidate is
whatever the active index stores (a document in plain mode, a
``TokenDocument`` in weighted mode); strategies never look inside it.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import Protocol, TypeVar


CandidateT = TypeVar("CandidateT")


class PruningStrategy(Protocol):
    """Protocol implemented by pruning strategies."""

    def prune(
        self, candidate_maps: Sequence[Mapping[Hashable, CandidateT]]
    ) -> dict[Hashable, CandidateT]:  # pragma: no cover - interface definition
        ...


class AllWordsMustMatchPruningStrategy:
    """Keep only uids present in every candidate map (intersection).

    Candidates are taken from the first map. No maps means no matches.
    """

    def prune(self, candidate_maps: Sequence[Mapping[Hashable, CandidateT]]) -> dict[Hashable, CandidateT]:
        if not candidate_maps:
            return {}
        first, *rest = candidate_maps
        return {uid: candidate for uid, candidate in first.items() if all(uid in other for other in rest)}


class AnyWordMustMatchPruningStrategy:
    """Keep uids present in at least one candidate map (union).

    When a uid appears under several tokens the earliest token's candidate wins.
    """

    def prune(self, candidate_maps: Sequence[Mapping[Hashable, CandidateT]]) -> dict[Hashable, CandidateT]:
        merged: dict[Hashable, CandidateT] = {}
        for candidates in candidate_maps:
            for uid, candidate in candidates.items():
                merged.setdefault(uid, candidate)
        return merged


_PRUNING_STRATEGY_FACTORIES: dict[str, Callable[[], PruningStrategy]] = {
    "all-words": AllWordsMustMatchPruningStrategy,
    "any-word": AnyWordMustMatchPruningStrategy,
}


def available_pruning_strategies() -> Sequence[str]:
    return sorted(_PRUNING_STRATEGY_FACTORIES)


def get_pruning_strategy(name: str | None) -> PruningStrategy:
    """Return pruning strategy by name, defaulting to all-words intersection."""

    normalized = (name or "all-words").lower()
    if normalized not in _PRUNING_STRATEGY_FACTORIES:
        msg = f"Unknown pruning strategy '{name}'. Available: {available_pruning_strategies()}"
        raise ValueError(msg)
    return _PRUNING_STRATEGY_FACTORIES[normalized]()
