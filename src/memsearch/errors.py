"""Exceptions raised by the search engine."""

from __future__ import annotations


class MemsearchError(Exception):
    """Base error for the memsearch package."""


class InvalidStateError(MemsearchError):
    """Raised when a setting changes after the engine has indexed documents."""

    def __init__(self, setting: str) -> None:
        self.setting = setting
        super().__init__(f"{setting} cannot be set after initialization")
