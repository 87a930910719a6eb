"""Custom exceptions for the resource search engine."""


# ========================================
# Base Exceptions
# ========================================


class ResourceSearchError(Exception):
    """Base exception for all resource search errors."""


# ========================================
# Backend Exceptions
# ========================================


class SearchBackendError(ResourceSearchError):
    """Base exception for search backend errors."""


class BackendUnavailableError(SearchBackendError):
    """Search backend could not be reached."""


class BackendQueryError(SearchBackendError):
    """Search backend rejected or failed to execute a query."""

    def __init__(self, message: str, error_type: str | None = None):
        self.error_type = error_type
        super().__init__(message)


class CollectionNotFoundError(SearchBackendError):
    """Target collection does not exist yet.

    Collections are created lazily the first time a resource of a given
    type is written, so callers treat this as an empty result.
    """

    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f"Search index for {collection} does not exist")


# ========================================
# Validation Exceptions
# ========================================


class ValidationError(ResourceSearchError):
    """Base exception for validation errors."""


class InvalidSearchParameterError(ValidationError):
    """A search parameter value could not be interpreted."""

    def __init__(self, parameter: str, value: object, reason: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid value {value!r} for {parameter}: {reason}")
