"""
Base protocol/interface for search backend implementations.
All backend adapters must implement this protocol.
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from resource_search.core.exceptions import SearchBackendError
from resource_search.queries import StructuredQuery
from resource_search.type_aliases import SearchHit


@dataclass
class BackendSearchResponse:
    """Result of a single query."""

    total: int
    hits: list[SearchHit] = field(default_factory=list)


@dataclass
class MultiSearchItem:
    """Result of one query inside a multi-search round trip.

    Exactly one of hits or error is meaningful: a failed query carries its
    error and no hits.
    """

    hits: list[SearchHit] = field(default_factory=list)
    error: SearchBackendError | None = None


@runtime_checkable
class SearchBackend(Protocol):
    """
    Protocol defining the interface for document search engine operations.
    """

    async def initialize(self) -> None:
        """
        Open the connection to the search engine.
        This should be called once when the application starts.
        """
        ...

    async def close(self) -> None:
        """Release the connection to the search engine."""
        ...

    async def search(self, query: StructuredQuery) -> BackendSearchResponse:
        """
        Execute a single structured query.

        Args:
            query: Query to run, including offset and limit

        Returns:
            Total number of matches and the hits of the requested page

        Raises:
            CollectionNotFoundError: If the target collection does not exist
            SearchBackendError: For any other failure
        """
        ...

    async def multi_search(self, queries: list[StructuredQuery]) -> list[MultiSearchItem]:
        """
        Execute several queries in one round trip.

        Per-query failures are reported in the returned items, in query order;
        only a failure of the round trip itself is raised.

        Args:
            queries: Queries to run

        Returns:
            One item per query, in the same order
        """
        ...
