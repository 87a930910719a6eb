"""Search orchestration engine.

This package implements the type-level search pipeline:
- query_builder: request parameters to a structured bool query
- executor: single and batched execution with lazy-collection tolerance
- pagination: previous/next page links
- inclusions: _include / _revinclude query construction
- inclusion_resolver: one round of inclusion expansion with access filtering
- iterative: depth-bounded, cycle-safe :iterate expansion
- assembler: raw hits to tagged, URL-annotated entries
"""

from .assembler import hits_to_search_entries, pass_through
from .executor import QueryExecutor
from .field_mapping import FieldMapper
from .inclusion_resolver import InclusionResolver
from .inclusions import InclusionDirective, InclusionQueryBuilder, Reference
from .iterative import ExpansionState, IterativeInclusionEngine
from .options import SearchOptions
from .pagination import PaginationLinks, build_pagination_links, create_url
from .query_builder import QueryBuilder

__all__ = [
    "ExpansionState",
    "FieldMapper",
    "InclusionDirective",
    "InclusionQueryBuilder",
    "InclusionResolver",
    "IterativeInclusionEngine",
    "PaginationLinks",
    "QueryBuilder",
    "QueryExecutor",
    "Reference",
    "SearchOptions",
    "build_pagination_links",
    "create_url",
    "hits_to_search_entries",
    "pass_through",
]
