"""Factory for search backend instances."""

from resource_search.config import Settings, get_settings

from .base import SearchBackend
from .elasticsearch import ElasticsearchBackend


def create_search_backend(settings: Settings | None = None) -> SearchBackend:
    """Create an uninitialized search backend from settings.

    Args:
        settings: Settings to use, defaults to the process-wide settings

    Returns:
        Backend adapter; call initialize() before use
    """
    settings = settings or get_settings()
    return ElasticsearchBackend(
        url=settings.elasticsearch_url,
        api_key=settings.elasticsearch_api_key,
        request_timeout=settings.elasticsearch_request_timeout,
    )


async def create_and_initialize_backend(settings: Settings | None = None) -> SearchBackend:
    """Create a search backend and open its connection."""
    backend = create_search_backend(settings)
    await backend.initialize()
    return backend
