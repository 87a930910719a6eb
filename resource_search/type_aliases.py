"""Common type aliases for the resource search engine.

This module defines type aliases used throughout the codebase to improve
readability and maintain consistency.
"""

from collections.abc import Callable
from typing import Any

# Document types
Resource = dict[str, Any]
"""A stored resource document.

Expected keys:
- resourceType: str - The resource type name (e.g. "Patient")
- id: str - The logical id, unique within its resource type
"""

SearchHit = dict[str, Any]
"""A raw hit returned by the search backend.

Expected keys:
- _source: Resource - The stored document
- _index: str - The collection the hit came from
"""

QueryClause = dict[str, Any]
"""A backend query clause, e.g. {"match": {"documentStatus": "AVAILABLE"}}."""

# Request types
QueryParamValue = str | list[str]
"""A query parameter value. Repeated parameters arrive as a list."""

QueryParams = dict[str, QueryParamValue]
"""Ordered mapping of query parameter name to value."""

# Strategy types
CleanUpFunction = Callable[[Resource], Resource]
"""Removes storage-internal fields from a stored document."""
