"""Resource search service.

Entry point of the search pipeline. A type search runs these stages in order,
each depending on the previous one:
1. Primary query (one page of matches)
2. Pagination links
3. One round of _include / _revinclude
4. Iterative _include:iterate / _revinclude:iterate rounds

Any backend failure fails the whole request; no partial result is returned.
"""

import logging
from collections.abc import Sequence

from resource_search.backends.base import SearchBackend
from resource_search.core.constants import DEFAULT_SCHEMA_VERSION
from resource_search.core.decorators import track_request
from resource_search.models import SearchEntry, SearchMode, SearchRequest, SearchResult
from resource_search.search.assembler import hits_to_search_entries, pass_through
from resource_search.search.executor import QueryExecutor
from resource_search.search.field_mapping import FieldMapper
from resource_search.search.inclusion_resolver import InclusionResolver
from resource_search.search.inclusions import InclusionQueryBuilder
from resource_search.search.iterative import IterativeInclusionEngine
from resource_search.search.options import SearchOptions
from resource_search.search.pagination import build_pagination_links
from resource_search.search.query_builder import QueryBuilder
from resource_search.type_aliases import CleanUpFunction, QueryClause

logger = logging.getLogger(__name__)


class ResourceSearchService:
    """Service for executing type-level resource searches with inclusions."""

    def __init__(
        self,
        backend: SearchBackend,
        filter_rules_for_active_resources: Sequence[QueryClause] = (),
        clean_up_function: CleanUpFunction = pass_through,
        schema_version: str = DEFAULT_SCHEMA_VERSION,
        field_mapper: FieldMapper | None = None,
        inclusion_query_builder: InclusionQueryBuilder | None = None,
        options: SearchOptions | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            backend: Search backend adapter
            filter_rules_for_active_resources: Filter clauses added to every query.
                If history and current versions share an index, pass e.g.
                [{"match": {"documentStatus": "AVAILABLE"}}] to hide history.
            clean_up_function: Removes storage-internal fields from returned documents
            schema_version: Resource schema version for inclusion queries
            field_mapper: Search parameter to document field mapping
            inclusion_query_builder: Builder for _include / _revinclude queries
            options: Search constants
        """
        self.options = options or SearchOptions()
        self.filter_rules = tuple(filter_rules_for_active_resources)
        self.clean_up_function = clean_up_function
        self.schema_version = schema_version

        field_mapper = field_mapper or FieldMapper()
        self.query_builder = QueryBuilder(field_mapper, self.filter_rules, self.options)
        self.executor = QueryExecutor(backend)
        self.inclusion_resolver = InclusionResolver(
            executor=self.executor,
            query_builder=inclusion_query_builder
            or InclusionQueryBuilder(field_mapper, self.options.inclusion_result_limit),
            filter_rules=self.filter_rules,
            schema_version=schema_version,
            clean_up=clean_up_function,
        )
        self.iterative_engine = IterativeInclusionEngine(self.inclusion_resolver, self.options)

    @track_request("type_search")
    async def search(self, request: SearchRequest) -> SearchResult:
        """Search one resource type.

        Args:
            request: Search request

        Returns:
            Matches for the requested page followed by included resources

        Raises:
            InvalidSearchParameterError: If pagination parameters are malformed
            SearchBackendError: If the backend fails for any reason other than
                a missing collection
        """
        query = self.query_builder.build(request.resource_type, request.query_params)
        response = await self.executor.execute_one(query)

        entries = hits_to_search_entries(
            response.hits,
            request.base_url,
            SearchMode.MATCH,
            self.clean_up_function,
        )
        links = build_pagination_links(
            request.base_url,
            request.resource_type,
            request.query_params,
            total=response.total,
            offset=query.offset,
            size=query.limit or self.options.default_page_size,
        )

        included = await self.inclusion_resolver.resolve(entries, request)
        entries.extend(_new_entries(entries, included))

        entries.extend(await self.iterative_engine.expand(entries, request))

        return SearchResult(
            number_of_results=response.total,
            entries=entries,
            previous_result_url=links.previous_result_url,
            next_result_url=links.next_result_url,
        )

    async def global_search(self, request: SearchRequest) -> SearchResult:
        """System-level search across all resource types.

        Raises:
            NotImplementedError: Always
        """
        logger.warning("Global search requested for %s but is not implemented", request.base_url)
        raise NotImplementedError("Global search is not implemented")


def _new_entries(existing: Sequence[SearchEntry], candidates: Sequence[SearchEntry]) -> list[SearchEntry]:
    seen = {entry.key for entry in existing}
    new = []
    for entry in candidates:
        if entry.key not in seen:
            seen.add(entry.key)
            new.append(entry)
    return new
