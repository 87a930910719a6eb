"""Tests for settings loading and engine options."""

import pytest
from pydantic import ValidationError

from resource_search.config import Settings, get_settings, reset_settings
from resource_search.search.options import SearchOptions


class TestSettings:
    """Test Settings defaults and environment overrides"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ELASTICSEARCH_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.elasticsearch_url == "http://localhost:9200"
        assert settings.search_default_page_size == 20
        assert settings.search_max_include_iterative_depth == 5
        assert settings.search_inclusion_result_limit == 1000
        assert settings.schema_version == "4.0.1"
        assert settings.debug is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ELASTICSEARCH_URL", "https://search.internal:9243/")
        monkeypatch.setenv("SEARCH_DEFAULT_PAGE_SIZE", "50")
        monkeypatch.setenv("SEARCH_MAX_INCLUDE_ITERATIVE_DEPTH", "3")
        monkeypatch.setenv("RESOURCE_SEARCH_DEBUG", "true")

        settings = Settings(_env_file=None)

        assert settings.elasticsearch_url == "https://search.internal:9243"
        assert settings.search_default_page_size == 50
        assert settings.search_max_include_iterative_depth == 3
        assert settings.debug is True

    def test_rejects_out_of_range_values(self, monkeypatch):
        monkeypatch.setenv("SEARCH_DEFAULT_PAGE_SIZE", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_to_dict_hides_secrets(self, monkeypatch):
        monkeypatch.setenv("ELASTICSEARCH_API_KEY", "secret")

        exported = Settings(_env_file=None).to_dict()

        assert exported["has_elasticsearch_api_key"] is True
        assert "secret" not in exported.values()


class TestGetSettings:
    """Test the settings singleton"""

    def test_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_reset_reloads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SEARCH_DEFAULT_PAGE_SIZE", "7")
        reset_settings()

        second = get_settings()

        assert second is not first
        assert second.search_default_page_size == 7


class TestSearchOptions:
    """Test SearchOptions"""

    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("SEARCH_DEFAULT_PAGE_SIZE", "25")
        monkeypatch.setenv("SEARCH_MAX_INCLUDE_ITERATIVE_DEPTH", "2")
        monkeypatch.setenv("SEARCH_INCLUSION_RESULT_LIMIT", "100")

        options = SearchOptions.from_settings(Settings(_env_file=None))

        assert options.default_page_size == 25
        assert options.max_include_iterative_depth == 2
        assert options.inclusion_result_limit == 100
        assert "_count" in options.non_searchable_parameters

    def test_options_are_immutable(self):
        options = SearchOptions()

        with pytest.raises(AttributeError):
            options.default_page_size = 5
