"""
Shared pytest fixtures and configuration for all tests.

No test talks to a real Elasticsearch cluster: the search pipeline is tested
against InMemorySearchBackend and the Elasticsearch adapter against a mocked
AsyncElasticsearch client.
"""

import os

import pytest

from search_test_helpers import BASE_URL, InMemorySearchBackend

from resource_search.config import reset_settings
from resource_search.models import SearchRequest
from resource_search.services import ResourceSearchService

# Set test environment variables BEFORE settings are first read
os.environ.setdefault("ELASTICSEARCH_URL", "http://localhost:9200")

ACTIVE_ONLY = [{"match": {"documentStatus": "AVAILABLE"}}]


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the cached settings around every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def backend():
    """Empty in-memory backend; tests add the documents they need."""
    return InMemorySearchBackend()


@pytest.fixture
def service(backend):
    """Search service over the in-memory backend, hiding non-AVAILABLE documents."""
    return ResourceSearchService(backend, filter_rules_for_active_resources=ACTIVE_ONLY)


@pytest.fixture
def make_request():
    """Factory for search requests with sensible defaults."""

    def _make_request(resource_type="Patient", query_params=None, allowed_resource_types=None):
        return SearchRequest(
            resource_type=resource_type,
            query_params=query_params or {},
            base_url=BASE_URL,
            allowed_resource_types=(
                allowed_resource_types
                if allowed_resource_types is not None
                else ["Patient", "Observation", "Practitioner", "Encounter"]
            ),
        )

    return _make_request
