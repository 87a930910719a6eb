"""Single and batched execution of structured queries."""

import logging

from resource_search.backends.base import BackendSearchResponse, SearchBackend
from resource_search.core.exceptions import CollectionNotFoundError
from resource_search.queries import StructuredQuery
from resource_search.type_aliases import SearchHit

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Runs queries against the search backend, tolerating lazily created collections."""

    def __init__(self, backend: SearchBackend):
        self.backend = backend

    async def execute_one(self, query: StructuredQuery) -> BackendSearchResponse:
        """Run a single query.

        A missing collection yields an empty response; any other backend
        error propagates unchanged.
        """
        try:
            return await self.backend.search(query)
        except CollectionNotFoundError:
            # Collections are created the first time a resource of a given type is written
            logger.info(
                "Search index for %s does not exist. Returning an empty search result",
                query.target_collection,
            )
            return BackendSearchResponse(total=0, hits=[])

    async def execute_batch(self, queries: list[StructuredQuery]) -> list[SearchHit]:
        """Run several queries in one round trip and concatenate their hits.

        Queries against missing collections contribute no hits. Any other
        per-query error aborts the whole batch.
        """
        if not queries:
            return []

        items = await self.backend.multi_search(queries)

        hits: list[SearchHit] = []
        for item in items:
            if item.error is not None:
                if isinstance(item.error, CollectionNotFoundError):
                    logger.info(
                        "Search index for %s does not exist. Returning an empty search result",
                        item.error.collection,
                    )
                    continue
                raise item.error
            hits.extend(item.hits)
        return hits
