"""Factory for the resource search service.

Builds the service from settings, separated so that callers can inject
their own backend in tests.
"""

from collections.abc import Sequence

from resource_search.backends.base import SearchBackend
from resource_search.backends.factory import create_search_backend
from resource_search.config import Settings, get_settings
from resource_search.search.assembler import pass_through
from resource_search.search.options import SearchOptions
from resource_search.type_aliases import CleanUpFunction, QueryClause

from .search_service import ResourceSearchService


def create_search_service(
    settings: Settings | None = None,
    backend: SearchBackend | None = None,
    filter_rules_for_active_resources: Sequence[QueryClause] = (),
    clean_up_function: CleanUpFunction = pass_through,
) -> ResourceSearchService:
    """Create a search service configured from settings.

    Args:
        settings: Settings to use, defaults to the process-wide settings
        backend: Backend to use, defaults to one built from settings
        filter_rules_for_active_resources: Filter clauses added to every query
        clean_up_function: Removes storage-internal fields from returned documents

    Returns:
        ResourceSearchService; the backend still needs initialize()
    """
    settings = settings or get_settings()
    return ResourceSearchService(
        backend=backend or create_search_backend(settings),
        filter_rules_for_active_resources=filter_rules_for_active_resources,
        clean_up_function=clean_up_function,
        schema_version=settings.schema_version,
        options=SearchOptions.from_settings(settings),
    )
