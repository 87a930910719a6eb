"""Translation of request parameters into a structured search query."""

import logging
from collections.abc import Sequence

from resource_search.core.constants import COUNT, PAGES_OFFSET
from resource_search.core.exceptions import InvalidSearchParameterError
from resource_search.queries import FieldMatchClause, StructuredQuery
from resource_search.type_aliases import QueryClause, QueryParams, QueryParamValue

from .field_mapping import FieldMapper
from .options import SearchOptions

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Builds the primary bool query for a type-level search."""

    def __init__(
        self,
        field_mapper: FieldMapper,
        filter_rules: Sequence[QueryClause] = (),
        options: SearchOptions | None = None,
    ):
        self.field_mapper = field_mapper
        self.filter_rules = tuple(filter_rules)
        self.options = options or SearchOptions()

    def build(self, resource_type: str, query_params: QueryParams) -> StructuredQuery:
        """Build the query for one page of matches.

        Args:
            resource_type: Resource type being searched
            query_params: Request parameters, control parameters included

        Returns:
            StructuredQuery against the lowercase collection of resource_type

        Raises:
            InvalidSearchParameterError: If _getpagesoffset or _count is malformed
        """
        offset = self.parse_offset(query_params)
        size = self.parse_page_size(query_params)

        must: list[FieldMatchClause] = []
        for search_parameter, value in query_params.items():
            if search_parameter in self.options.non_searchable_parameters:
                continue
            field = self.field_mapper.map_to_field_path(search_parameter)
            for raw_value in _as_list(value):
                must.append(FieldMatchClause(field=field, raw_value=raw_value))

        logger.debug(
            "Built query for %s with %d clauses (offset=%d, size=%d)",
            resource_type,
            len(must),
            offset,
            size,
        )
        return StructuredQuery(
            target_collection=resource_type.lower(),
            offset=offset,
            limit=size,
            must=tuple(must),
            filters=self.filter_rules,
        )

    def parse_offset(self, query_params: QueryParams) -> int:
        raw = query_params.get(PAGES_OFFSET)
        if not raw:
            return 0
        offset = _parse_int(PAGES_OFFSET, raw)
        if offset < 0:
            raise InvalidSearchParameterError(PAGES_OFFSET, raw, "must not be negative")
        return offset

    def parse_page_size(self, query_params: QueryParams) -> int:
        raw = query_params.get(COUNT)
        if not raw:
            return self.options.default_page_size
        size = _parse_int(COUNT, raw)
        if size < 1:
            raise InvalidSearchParameterError(COUNT, raw, "must be a positive integer")
        return size


def _as_list(value: QueryParamValue) -> list[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


def _parse_int(parameter: str, raw: QueryParamValue) -> int:
    values = _as_list(raw)
    if len(values) != 1:
        raise InvalidSearchParameterError(parameter, raw, "must be given once")
    try:
        return int(values[0].strip())
    except ValueError as e:
        raise InvalidSearchParameterError(parameter, raw, "must be an integer") from e
