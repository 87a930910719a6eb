"""One round of _include / _revinclude expansion."""

import logging
from collections.abc import Sequence

from resource_search.models import SearchEntry, SearchMode, SearchRequest
from resource_search.type_aliases import CleanUpFunction, QueryClause

from .assembler import hits_to_search_entries, pass_through
from .executor import QueryExecutor
from .inclusions import InclusionQueryBuilder

logger = logging.getLogger(__name__)


class InclusionResolver:
    """Resolves the resources related to a set of entries in one batched round trip."""

    def __init__(
        self,
        executor: QueryExecutor,
        query_builder: InclusionQueryBuilder,
        filter_rules: Sequence[QueryClause] = (),
        schema_version: str = "4.0.1",
        clean_up: CleanUpFunction = pass_through,
    ):
        self.executor = executor
        self.query_builder = query_builder
        self.filter_rules = tuple(filter_rules)
        self.schema_version = schema_version
        self.clean_up = clean_up

    async def resolve(
        self,
        entries: Sequence[SearchEntry],
        request: SearchRequest,
        iterative: bool = False,
    ) -> list[SearchEntry]:
        """Find the resources included by entries.

        Only collections listed in request.allowed_resource_types are ever
        queried; inclusion queries for any other collection are dropped.

        Args:
            entries: Entries whose relationships are followed
            request: Original request, source of the inclusion directives
            iterative: Follow the :iterate directives instead of the plain ones

        Returns:
            Included entries, tagged with mode include, in backend order
        """
        resources = [entry.resource for entry in entries]
        include_queries = self.query_builder.build_include_queries(
            request.query_params,
            resources,
            self.filter_rules,
            self.schema_version,
            iterative,
        )
        rev_include_queries = self.query_builder.build_rev_include_queries(
            request.query_params,
            resources,
            self.filter_rules,
            self.schema_version,
            iterative,
        )

        allowed_collections = {r.lower() for r in request.allowed_resource_types}
        allowed_queries = []
        for query in [*include_queries, *rev_include_queries]:
            if query.target_collection in allowed_collections:
                allowed_queries.append(query)
            else:
                logger.debug("Dropping inclusion query for disallowed collection %s", query.target_collection)

        hits = await self.executor.execute_batch(allowed_queries)
        return hits_to_search_entries(hits, request.base_url, SearchMode.INCLUDE, self.clean_up)
