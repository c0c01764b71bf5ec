"""Sanitizers normalize raw field and query text before tokenizing."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol


class Sanitizer(Protocol):
    """Protocol implemented by sanitizers."""

    def sanitize(self, text: str) -> str:  # pragma: no cover - interface definition
        ...


class LowerCaseSanitizer:
    """Trims surrounding whitespace and lowercases text."""

    def sanitize(self, text: str) -> str:
        return text.strip().lower() if text else ""


class CaseSensitiveSanitizer:
    """Trims surrounding whitespace and keeps case intact."""

    def sanitize(self, text: str) -> str:
        return text.strip() if text else ""


_SANITIZER_FACTORIES: dict[str, Callable[[], Sanitizer]] = {
    "lower-case": LowerCaseSanitizer,
    "case-sensitive": CaseSensitiveSanitizer,
}


def available_sanitizers() -> Sequence[str]:
    return sorted(_SANITIZER_FACTORIES)


def get_sanitizer(name: str | None) -> Sanitizer:
    """Return sanitizer by name, defaulting to lower-casing."""

    normalized = (name or "lower-case").lower()
    if normalized not in _SANITIZER_FACTORIES:
        msg = f"Unknown sanitizer '{name}'. Available: {available_sanitizers()}"
        raise ValueError(msg)
    return _SANITIZER_FACTORIES[normalized]()
