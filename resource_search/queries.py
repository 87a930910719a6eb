"""Structured query value types.

A StructuredQuery is backend-neutral until rendered with to_query(); the
Elasticsearch adapter is the only place that renders it.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from resource_search.type_aliases import QueryClause


class Clause(Protocol):
    """A query clause that renders to a backend dictionary."""

    def to_dict(self) -> QueryClause: ...


@dataclass(frozen=True)
class FieldMatchClause:
    """AND-tokenised, lenient match of a raw value against one field.

    Lenient matching makes a value that cannot be parsed for the field's type
    match nothing instead of failing the whole query.
    """

    field: str
    raw_value: str

    def to_dict(self) -> QueryClause:
        return {
            "query_string": {
                "fields": [self.field],
                "query": self.raw_value,
                "default_operator": "AND",
                "lenient": True,
            },
        }


@dataclass(frozen=True)
class TermsClause:
    """Exact match of a field against any of several values."""

    field: str
    values: tuple[str, ...]

    def to_dict(self) -> QueryClause:
        return {"terms": {self.field: list(self.values)}}


@dataclass(frozen=True)
class StructuredQuery:
    """A bool query against a single collection."""

    target_collection: str
    offset: int = 0
    limit: int | None = None
    must: tuple[Clause, ...] = ()
    filters: tuple[QueryClause, ...] = field(default=())

    def to_query(self) -> dict[str, Any]:
        return {
            "bool": {
                "must": [clause.to_dict() for clause in self.must],
                "filter": list(self.filters),
            },
        }
