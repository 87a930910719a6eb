"""Search backend adapters.

Supports Elasticsearch through the SearchBackend protocol.
"""

from .base import BackendSearchResponse, MultiSearchItem, SearchBackend
from .elasticsearch import ElasticsearchBackend
from .factory import create_and_initialize_backend, create_search_backend

__all__ = [
    "BackendSearchResponse",
    "ElasticsearchBackend",
    "MultiSearchItem",
    "SearchBackend",
    "create_and_initialize_backend",
    "create_search_backend",
]
