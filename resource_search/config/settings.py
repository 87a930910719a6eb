"""Configuration settings for the resource search engine using Pydantic Settings.

This module provides type-safe configuration management with automatic validation
and environment variable loading.
"""

import logging
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resource_search.core.constants import (
    DEFAULT_SCHEMA_VERSION,
    DEFAULT_SEARCH_RESULTS_PER_PAGE,
    MAX_INCLUDE_ITERATIVE_DEPTH,
    MAX_INCLUSION_PARAM_RESULTS,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Central configuration management with Pydantic validation.

    All settings are loaded from environment variables with automatic type conversion
    and validation. Default values are provided for non-critical settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
        populate_by_name=True,
    )

    # ========================================
    # Debug Settings
    # ========================================
    debug: bool = Field(
        default=False,
        alias="RESOURCE_SEARCH_DEBUG",
        description="Enable debug mode with verbose logging",
    )

    # ========================================
    # Elasticsearch Settings
    # ========================================
    elasticsearch_url: str = Field(
        default="http://localhost:9200",
        description="Elasticsearch cluster URL",
    )

    elasticsearch_api_key: str | None = Field(
        default=None,
        description="Elasticsearch API key for authentication",
    )

    elasticsearch_request_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Timeout in seconds for a single Elasticsearch round trip",
    )

    # ========================================
    # Search Settings
    # ========================================
    search_default_page_size: int = Field(
        default=DEFAULT_SEARCH_RESULTS_PER_PAGE,
        ge=1,
        le=10000,
        description="Page size used when the request carries no _count",
    )

    search_max_include_iterative_depth: int = Field(
        default=MAX_INCLUDE_ITERATIVE_DEPTH,
        ge=1,
        le=20,
        description="Maximum rounds of _include:iterate / _revinclude:iterate expansion",
    )

    search_inclusion_result_limit: int = Field(
        default=MAX_INCLUSION_PARAM_RESULTS,
        ge=1,
        le=10000,
        description="Maximum hits returned by a single inclusion query",
    )

    schema_version: str = Field(
        default=DEFAULT_SCHEMA_VERSION,
        description="Resource schema version passed to the inclusion query builder",
    )

    # ========================================
    # Validators
    # ========================================
    @field_validator("elasticsearch_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise the cluster URL so it can be joined safely."""
        return v.rstrip("/")

    # ========================================
    # Helper Methods
    # ========================================
    def to_dict(self) -> dict[str, Any]:
        """Export settings as a dictionary (safe version without secrets)."""
        return {
            "debug": self.debug,
            "elasticsearch_url": self.elasticsearch_url,
            "has_elasticsearch_api_key": bool(self.elasticsearch_api_key),
            "elasticsearch_request_timeout": self.elasticsearch_request_timeout,
            "search_default_page_size": self.search_default_page_size,
            "search_max_include_iterative_depth": self.search_max_include_iterative_depth,
            "search_inclusion_result_limit": self.search_inclusion_result_limit,
            "schema_version": self.schema_version,
        }


# Singleton pattern with proper typing
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
        logger.info("Settings initialized from environment")
        logger.debug("Elasticsearch URL: %s", _settings_instance.elasticsearch_url)
    return _settings_instance


def reset_settings() -> None:
    """Reset settings instance (useful for testing)."""
    global _settings_instance
    _settings_instance = None
