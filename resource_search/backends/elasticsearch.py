"""
Elasticsearch adapter implementation for the SearchBackend protocol.

Uses AsyncElasticsearch for native async search operations.
"""

import logging
from typing import Any

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from resource_search.core.constants import INDEX_NOT_FOUND_EXCEPTION
from resource_search.core.exceptions import (
    BackendQueryError,
    BackendUnavailableError,
    CollectionNotFoundError,
    SearchBackendError,
)
from resource_search.queries import StructuredQuery

from .base import BackendSearchResponse, MultiSearchItem

logger = logging.getLogger(__name__)


class ElasticsearchBackend:
    """
    Elasticsearch implementation of the SearchBackend protocol.

    Each resource type lives in its own index, named after the lowercase
    resource type.
    """

    def __init__(
        self,
        url: str = "http://localhost:9200",
        api_key: str | None = None,
        request_timeout: float = 30.0,
        client: AsyncElasticsearch | None = None,
    ):
        """Initialize Elasticsearch adapter with connection parameters"""
        self.url = url
        self.api_key = api_key
        self.request_timeout = request_timeout
        self.client: AsyncElasticsearch | None = client

    async def initialize(self) -> None:
        """Create the async client if one was not injected"""
        if self.client is not None:
            return
        self.client = AsyncElasticsearch(
            hosts=[self.url],
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        logger.info("Elasticsearch client created for %s", self.url)

    async def close(self) -> None:
        """Close the Elasticsearch client."""
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.info("Elasticsearch client closed")

    async def search(self, query: StructuredQuery) -> BackendSearchResponse:
        client = self._require_client()
        kwargs: dict[str, Any] = {
            "index": query.target_collection,
            "from_": query.offset,
            "query": query.to_query(),
        }
        if query.limit is not None:
            kwargs["size"] = query.limit

        try:
            response = await client.search(**kwargs)
        except ApiError as e:
            raise _translate_api_error(e, query.target_collection) from e
        except TransportError as e:
            raise BackendUnavailableError(f"Elasticsearch is unavailable: {e}") from e

        hits = response["hits"]
        return BackendSearchResponse(total=_total_value(hits["total"]), hits=list(hits["hits"]))

    async def multi_search(self, queries: list[StructuredQuery]) -> list[MultiSearchItem]:
        client = self._require_client()
        searches: list[dict[str, Any]] = []
        for query in queries:
            body: dict[str, Any] = {"query": query.to_query()}
            if query.offset:
                body["from"] = query.offset
            if query.limit is not None:
                body["size"] = query.limit
            searches.extend([{"index": query.target_collection}, body])

        try:
            response = await client.msearch(searches=searches)
        except ApiError as e:
            raise BackendQueryError(f"Multi-search failed: {e.message}", e.message) from e
        except TransportError as e:
            raise BackendUnavailableError(f"Elasticsearch is unavailable: {e}") from e

        items = []
        for query, item in zip(queries, response["responses"], strict=True):
            if "error" in item:
                items.append(MultiSearchItem(error=_translate_item_error(item["error"], query)))
            else:
                items.append(MultiSearchItem(hits=list(item["hits"]["hits"])))
        return items

    def _require_client(self) -> AsyncElasticsearch:
        if self.client is None:
            raise BackendUnavailableError("Elasticsearch client is not initialized")
        return self.client


def _total_value(total: Any) -> int:
    # Elasticsearch 7+ reports {"value": n, "relation": "eq"}
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total)


def _translate_api_error(error: ApiError, collection: str) -> SearchBackendError:
    if error.message == INDEX_NOT_FOUND_EXCEPTION:
        return CollectionNotFoundError(collection)
    return BackendQueryError(f"Search on {collection} failed: {error}", error.message)


def _translate_item_error(error: Any, query: StructuredQuery) -> SearchBackendError:
    if isinstance(error, dict):
        error_type = error.get("type")
        if error_type == INDEX_NOT_FOUND_EXCEPTION:
            return CollectionNotFoundError(error.get("index", query.target_collection))
        reason = error.get("reason", error_type)
        return BackendQueryError(f"Search on {query.target_collection} failed: {reason}", error_type)
    return BackendQueryError(f"Search on {query.target_collection} failed: {error}")
