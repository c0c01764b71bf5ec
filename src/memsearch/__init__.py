"""memsearch: in-memory full-text search with optional TF-IDF ranking."""

from memsearch.errors import InvalidStateError, MemsearchError
from memsearch.search.engine import Search
from memsearch.search.index_strategies import (
    AllSubstringsIndexStrategy,
    ExactWordIndexStrategy,
    IndexStrategy,
    PrefixIndexStrategy,
)
from memsearch.search.models import IndexMode, IndexStats, TokenDocument, WeightedIndexEntry
from memsearch.search.pruning import (
    AllWordsMustMatchPruningStrategy,
    AnyWordMustMatchPruningStrategy,
    PruningStrategy,
)
from memsearch.search.sanitizers import CaseSensitiveSanitizer, LowerCaseSanitizer, Sanitizer
from memsearch.search.tokenizers import SimpleTokenizer, StemmingTokenizer, StopWordsTokenizer, Tokenizer


__all__ = [
    "AllSubstringsIndexStrategy",
    "AllWordsMustMatchPruningStrategy",
    "AnyWordMustMatchPruningStrategy",
    "CaseSensitiveSanitizer",
    "ExactWordIndexStrategy",
    "IndexMode",
    "IndexStats",
    "IndexStrategy",
    "InvalidStateError",
    "LowerCaseSanitizer",
    "MemsearchError",
    "PrefixIndexStrategy",
    "PruningStrategy",
    "Sanitizer",
    "Search",
    "SimpleTokenizer",
    "StemmingTokenizer",
    "StopWordsTokenizer",
    "TokenDocument",
    "Tokenizer",
    "WeightedIndexEntry",
]
