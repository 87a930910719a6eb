"""Search service facade and factory."""

from .factory import create_search_service
from .search_service import ResourceSearchService

__all__ = ["ResourceSearchService", "create_search_service"]
