"""
Unit tests for the Elasticsearch backend adapter.

Tests request construction and error translation with a mocked
AsyncElasticsearch client (no actual cluster calls).
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from elasticsearch import ApiError, ConnectionError as ESConnectionError, NotFoundError

from resource_search.backends.elasticsearch import ElasticsearchBackend
from resource_search.core.exceptions import (
    BackendQueryError,
    BackendUnavailableError,
    CollectionNotFoundError,
)
from resource_search.queries import FieldMatchClause, StructuredQuery, TermsClause

ACTIVE_ONLY = ({"match": {"documentStatus": "AVAILABLE"}},)


def _api_error(error_cls, error_type, status):
    body = {"error": {"type": error_type, "reason": "boom"}, "status": status}
    return error_cls(message=error_type, meta=MagicMock(status=status), body=body)


def _search_response(total, *ids):
    return {
        "hits": {
            "total": {"value": total, "relation": "eq"},
            "hits": [{"_index": "patient", "_id": i, "_source": {"resourceType": "Patient", "id": i}} for i in ids],
        },
    }


@pytest.fixture
def mock_client():
    """Create mocked AsyncElasticsearch."""
    client = MagicMock()
    client.search = AsyncMock()
    client.msearch = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def backend(mock_client):
    return ElasticsearchBackend(client=mock_client)


class TestLifecycle:
    """Test initialize and close"""

    @pytest.mark.asyncio
    async def test_initialize_creates_client(self):
        with patch("resource_search.backends.elasticsearch.AsyncElasticsearch") as mock_es:
            backend = ElasticsearchBackend(url="http://es:9200", api_key="secret", request_timeout=5.0)
            await backend.initialize()

        mock_es.assert_called_once_with(hosts=["http://es:9200"], api_key="secret", request_timeout=5.0)
        assert backend.client is mock_es.return_value

    @pytest.mark.asyncio
    async def test_initialize_keeps_injected_client(self, backend, mock_client):
        with patch("resource_search.backends.elasticsearch.AsyncElasticsearch") as mock_es:
            await backend.initialize()

        mock_es.assert_not_called()
        assert backend.client is mock_client

    @pytest.mark.asyncio
    async def test_close_releases_client(self, backend, mock_client):
        await backend.close()

        mock_client.close.assert_awaited_once()
        assert backend.client is None

    @pytest.mark.asyncio
    async def test_search_before_initialize_fails(self):
        with pytest.raises(BackendUnavailableError):
            await ElasticsearchBackend().search(StructuredQuery(target_collection="patient"))


class TestSearch:
    """Test ElasticsearchBackend.search"""

    @pytest.mark.asyncio
    async def test_sends_bool_query_with_paging(self, backend, mock_client):
        mock_client.search.return_value = _search_response(42, "p1", "p2")
        query = StructuredQuery(
            target_collection="patient",
            offset=20,
            limit=10,
            must=(FieldMatchClause(field="name", raw_value="john"),),
            filters=ACTIVE_ONLY,
        )

        response = await backend.search(query)

        mock_client.search.assert_awaited_once_with(
            index="patient",
            from_=20,
            size=10,
            query=query.to_query(),
        )
        assert response.total == 42
        assert [hit["_id"] for hit in response.hits] == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_accepts_legacy_integer_total(self, backend, mock_client):
        mock_client.search.return_value = {"hits": {"total": 3, "hits": []}}

        response = await backend.search(StructuredQuery(target_collection="patient"))

        assert response.total == 3

    @pytest.mark.asyncio
    async def test_index_not_found_becomes_collection_not_found(self, backend, mock_client):
        mock_client.search.side_effect = _api_error(NotFoundError, "index_not_found_exception", 404)

        with pytest.raises(CollectionNotFoundError) as exc_info:
            await backend.search(StructuredQuery(target_collection="encounter"))

        assert exc_info.value.collection == "encounter"

    @pytest.mark.asyncio
    async def test_other_not_found_is_a_query_error(self, backend, mock_client):
        mock_client.search.side_effect = _api_error(NotFoundError, "resource_not_found_exception", 404)

        with pytest.raises(BackendQueryError) as exc_info:
            await backend.search(StructuredQuery(target_collection="patient"))

        assert exc_info.value.error_type == "resource_not_found_exception"

    @pytest.mark.asyncio
    async def test_api_error_becomes_query_error(self, backend, mock_client):
        mock_client.search.side_effect = _api_error(ApiError, "search_phase_execution_exception", 400)

        with pytest.raises(BackendQueryError):
            await backend.search(StructuredQuery(target_collection="patient"))

    @pytest.mark.asyncio
    async def test_connection_error_becomes_unavailable(self, backend, mock_client):
        mock_client.search.side_effect = ESConnectionError("connection refused")

        with pytest.raises(BackendUnavailableError):
            await backend.search(StructuredQuery(target_collection="patient"))


class TestMultiSearch:
    """Test ElasticsearchBackend.multi_search"""

    @pytest.mark.asyncio
    async def test_sends_header_body_pairs(self, backend, mock_client):
        mock_client.msearch.return_value = {"responses": [_search_response(1, "p1"), _search_response(0)]}
        queries = [
            StructuredQuery(
                target_collection="patient",
                limit=1000,
                must=(TermsClause(field="id", values=("p1",)),),
                filters=ACTIVE_ONLY,
            ),
            StructuredQuery(target_collection="observation"),
        ]

        items = await backend.multi_search(queries)

        mock_client.msearch.assert_awaited_once_with(
            searches=[
                {"index": "patient"},
                {"query": queries[0].to_query(), "size": 1000},
                {"index": "observation"},
                {"query": queries[1].to_query()},
            ],
        )
        assert [hit["_id"] for hit in items[0].hits] == ["p1"]
        assert items[1].hits == []
        assert all(item.error is None for item in items)

    @pytest.mark.asyncio
    async def test_isolates_per_query_errors(self, backend, mock_client):
        mock_client.msearch.return_value = {
            "responses": [
                _search_response(1, "p1"),
                {"error": {"type": "index_not_found_exception", "index": "encounter"}, "status": 404},
                {"error": {"type": "query_shard_exception", "reason": "failed to parse"}, "status": 400},
            ],
        }
        queries = [
            StructuredQuery(target_collection="patient"),
            StructuredQuery(target_collection="encounter"),
            StructuredQuery(target_collection="observation"),
        ]

        items = await backend.multi_search(queries)

        assert items[0].error is None
        assert isinstance(items[1].error, CollectionNotFoundError)
        assert items[1].error.collection == "encounter"
        assert isinstance(items[2].error, BackendQueryError)
        assert items[2].error.error_type == "query_shard_exception"

    @pytest.mark.asyncio
    async def test_round_trip_failure_is_raised(self, backend, mock_client):
        mock_client.msearch.side_effect = ESConnectionError("connection refused")

        with pytest.raises(BackendUnavailableError):
            await backend.multi_search([StructuredQuery(target_collection="patient")])
