"""Centralized configuration for memsearch using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memsearch.search.index_strategies import available_index_strategies
from memsearch.search.pruning import available_pruning_strategies
from memsearch.search.sanitizers import available_sanitizers
from memsearch.search.tokenizers import available_tokenizers


class SearchSettings(BaseSettings):
    """Engine defaults loaded from ``MEMSEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    enable_tf_idf: bool = Field(default=True, description="Rank results by TF-IDF instead of plain membership")

    tokenizer: str = Field(default="simple", description="Registered tokenizer name")
    sanitizer: str = Field(default="lower-case", description="Registered sanitizer name")
    index_strategy: str = Field(default="prefix", description="Registered index strategy name")
    pruning_strategy: str = Field(default="all-words", description="Registered pruning strategy name")

    stop_words: bool = Field(default=False, description="Drop common English stop words while tokenizing")
    stemming: bool = Field(default=False, description="Stem tokens with the built-in Porter-style stemmer")

    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    tracing_enabled: bool = Field(default=False, description="Install an OpenTelemetry tracer provider")
    metrics_enabled: bool = Field(default=False, description="Install an OpenTelemetry meter provider")

    @model_validator(mode="after")
    def validate_strategy_names(self) -> SearchSettings:
        choices = {
            "tokenizer": available_tokenizers(),
            "sanitizer": available_sanitizers(),
            "index_strategy": available_index_strategies(),
            "pruning_strategy": available_pruning_strategies(),
        }
        for field_name, available in choices.items():
            value = getattr(self, field_name).lower()
            if value not in available:
                raise ValueError(f"MEMSEARCH_{field_name.upper()} must be one of {list(available)}, got '{value}'")
            setattr(self, field_name, value)
        return self


@lru_cache(maxsize=1)
def get_settings() -> SearchSettings:
    """Return process-wide settings loaded once from the environment."""
    return SearchSettings()
