"""Tokenizers that split sanitized text into index tokens.

Tokenizers are composable: ``StopWordsTokenizer`` and ``StemmingTokenizer``
wrap another tokenizer and post-process its output, so a pipeline such as
"simple split, drop stop words, stem" is expressed by nesting instances.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import re
from typing import Protocol


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def tokenize(self, text: str) -> list[str]:  # pragma: no cover - interface definition
        ...


class SimpleTokenizer:
    """Split on any run of characters that are not letters, digits, hyphens or apostrophes.

    Letters and digits are matched in any script; underscores separate tokens.
    """

    _SPLIT_PATTERN = re.compile(r"[^\w\-']+|_+", re.UNICODE)

    def tokenize(self, text: str) -> list[str]:
        return [token for token in self._SPLIT_PATTERN.split(text) if token]


DEFAULT_STOPWORDS = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "but",
        "by",
        "for",
        "if",
        "in",
        "into",
        "is",
        "it",
        "no",
        "not",
        "of",
        "on",
        "or",
        "such",
        "that",
        "the",
        "their",
        "then",
        "there",
        "these",
        "they",
        "this",
        "to",
        "was",
        "will",
        "with",
    }
)


class StopWordsTokenizer:
    """Drops stop words from the output of a wrapped tokenizer."""

    def __init__(self, tokenizer: Tokenizer, stopwords: Iterable[str] | None = None) -> None:
        self.tokenizer = tokenizer
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = {word.lower() for word in vocab}

    def tokenize(self, text: str) -> list[str]:
        return [token for token in self.tokenizer.tokenize(text) if token.lower() not in self.stopwords]


_SUFFIX_RULES: tuple[tuple[str, str], ...] = (
    ("ization", "ize"),
    ("ational", "ate"),
    ("fulness", "ful"),
    ("ousness", "ous"),
    ("iveness", "ive"),
    ("tional", "tion"),
    ("biliti", "ble"),
    ("entli", "ent"),
    ("izer", "ize"),
    ("ator", "ate"),
    ("ation", "ate"),
    ("ness", ""),
    ("ment", ""),
)

_SIMPLE_SUFFIXES: tuple[str, ...] = ("ingly", "edly", "ing", "ed", "ly", "es", "s")


def porter_stem(word: str) -> str:
    """Return a small Porter-style stem of ``word``.

    Complex suffix rules are tried before plain suffix stripping; stems
    shorter than two characters are never produced.
    """

    for suffix, replacement in _SUFFIX_RULES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 2:
            return word[: -len(suffix)] + replacement
    for suffix in _SIMPLE_SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= 2:
            return word[: -len(suffix)]
    return word


class StemmingTokenizer:
    """Applies a stemming function to every token of a wrapped tokenizer."""

    def __init__(self, tokenizer: Tokenizer, stemming_function: Callable[[str], str] = porter_stem) -> None:
        self.tokenizer = tokenizer
        self.stemming_function = stemming_function

    def tokenize(self, text: str) -> list[str]:
        return [self.stemming_function(token) for token in self.tokenizer.tokenize(text)]


_TOKENIZER_FACTORIES: dict[str, Callable[[], Tokenizer]] = {
    "simple": SimpleTokenizer,
}


def available_tokenizers() -> Sequence[str]:
    return sorted(_TOKENIZER_FACTORIES)


def get_tokenizer(name: str | None, *, stop_words: bool = False, stemming: bool = False) -> Tokenizer:
    """Return tokenizer by name, optionally wrapped with stop word and stemming filters."""

    normalized = (name or "simple").lower()
    if normalized not in _TOKENIZER_FACTORIES:
        msg = f"Unknown tokenizer '{name}'. Available: {available_tokenizers()}"
        raise ValueError(msg)
    tokenizer = _TOKENIZER_FACTORIES[normalized]()
    if stop_words:
        tokenizer = StopWordsTokenizer(tokenizer)
    if stemming:
        tokenizer = StemmingTokenizer(tokenizer)
    return tokenizer
