"""Core functionality for the resource search engine."""

from .constants import (
    COUNT,
    DEFAULT_SEARCH_RESULTS_PER_PAGE,
    INCLUDE,
    INCLUDE_ITERATE,
    ITERATIVE_INCLUSION_PARAMETERS,
    MAX_INCLUDE_ITERATIVE_DEPTH,
    NON_SEARCHABLE_PARAMETERS,
    PAGES_OFFSET,
    REVINCLUDE,
    REVINCLUDE_ITERATE,
)
from .decorators import track_request
from .exceptions import (
    BackendQueryError,
    BackendUnavailableError,
    CollectionNotFoundError,
    InvalidSearchParameterError,
    ResourceSearchError,
    SearchBackendError,
)
from .logging import RequestIdFilter, configure_logging, logger, request_id_ctx

__all__ = [
    # Core
    "RequestIdFilter",
    "configure_logging",
    "logger",
    "request_id_ctx",
    "track_request",
    # Exceptions
    "BackendQueryError",
    "BackendUnavailableError",
    "CollectionNotFoundError",
    "InvalidSearchParameterError",
    "ResourceSearchError",
    "SearchBackendError",
    # Constants
    "COUNT",
    "DEFAULT_SEARCH_RESULTS_PER_PAGE",
    "INCLUDE",
    "INCLUDE_ITERATE",
    "ITERATIVE_INCLUSION_PARAMETERS",
    "MAX_INCLUDE_ITERATIVE_DEPTH",
    "NON_SEARCHABLE_PARAMETERS",
    "PAGES_OFFSET",
    "REVINCLUDE",
    "REVINCLUDE_ITERATE",
]
