"""
Resource Search - search orchestration over a document search engine.

This package resolves type-level resource searches into paginated,
deduplicated result bundles, including resources reached through
_include / _revinclude references.
"""

__version__ = "0.1.0"

from .models import SearchEntry, SearchMode, SearchRequest, SearchResult
from .services import ResourceSearchService, create_search_service

__all__ = [
    "ResourceSearchService",
    "SearchEntry",
    "SearchMode",
    "SearchRequest",
    "SearchResult",
    "create_search_service",
]
