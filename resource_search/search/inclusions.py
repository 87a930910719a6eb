"""
Inclusion query construction.

Turns _include / _revinclude directives and the resources already in a
result into queries for the resources they reference, or that reference them.

Directive syntax is "SourceType:searchParam[:TargetType]":
- _include=Observation:subject:Patient follows Observation.subject to Patient
- _revinclude=Observation:subject:Patient finds Observations whose subject
  points at a Patient in the result
"""

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from resource_search.core.constants import (
    INCLUDE,
    INCLUDE_ITERATE,
    MAX_INCLUSION_PARAM_RESULTS,
    REVINCLUDE,
    REVINCLUDE_ITERATE,
)
from resource_search.queries import StructuredQuery, TermsClause
from resource_search.type_aliases import QueryClause, QueryParams, Resource

from .field_mapping import FieldMapper

logger = logging.getLogger(__name__)

# Relative ("Patient/1") or absolute ("https://host/fhir/Patient/1/_history/2") references
REFERENCE_PATTERN = re.compile(
    r"(?:^|/)(?P<type>[A-Z][A-Za-z]+)/(?P<id>[A-Za-z0-9\-.]{1,64})(?:/_history/[A-Za-z0-9\-.]{1,64})?$",
)


@dataclass(frozen=True)
class InclusionDirective:
    """A parsed _include or _revinclude value."""

    source_type: str
    search_parameter: str
    target_type: str | None = None

    @classmethod
    def parse(cls, raw: str) -> "InclusionDirective | None":
        """Parse a directive, returning None for malformed or wildcard values."""
        parts = raw.split(":")
        if len(parts) not in (2, 3) or not all(parts):
            return None
        if "*" in parts:
            return None
        target_type = parts[2] if len(parts) == 3 else None
        return cls(source_type=parts[0], search_parameter=parts[1], target_type=target_type)


@dataclass(frozen=True)
class Reference:
    resource_type: str
    id: str

    @classmethod
    def parse(cls, raw: str) -> "Reference | None":
        match = REFERENCE_PATTERN.search(raw)
        if match is None:
            return None
        return cls(resource_type=match.group("type"), id=match.group("id"))

    def __str__(self) -> str:
        return f"{self.resource_type}/{self.id}"


class InclusionQueryBuilder:
    """Builds forward and reverse inclusion queries from request directives."""

    def __init__(
        self,
        field_mapper: FieldMapper | None = None,
        result_limit: int = MAX_INCLUSION_PARAM_RESULTS,
    ):
        self.field_mapper = field_mapper or FieldMapper()
        self.result_limit = result_limit

    def build_include_queries(
        self,
        query_params: QueryParams,
        resources: Sequence[Resource],
        filter_rules: Sequence[QueryClause],
        schema_version: str,
        iterative: bool = False,
    ) -> list[StructuredQuery]:
        """Build queries for the resources referenced by resources.

        References are grouped by target type, so each target collection is
        queried once however many directives point at it.
        """
        directives = _directives(query_params, INCLUDE_ITERATE if iterative else INCLUDE)
        if not directives:
            return []
        logger.debug("Building %d include queries (schema %s)", len(directives), schema_version)

        ids_by_type: dict[str, dict[str, None]] = {}
        for directive in directives:
            path = f"{self.field_mapper.map_to_field_path(directive.search_parameter)}.reference"
            for resource in resources:
                if resource.get("resourceType") != directive.source_type:
                    continue
                for reference in _references_at(resource, path):
                    if directive.target_type and reference.resource_type != directive.target_type:
                        continue
                    ids_by_type.setdefault(reference.resource_type, {})[reference.id] = None

        return [
            StructuredQuery(
                target_collection=resource_type.lower(),
                limit=self.result_limit,
                must=(TermsClause(field="id", values=tuple(ids)),),
                filters=tuple(filter_rules),
            )
            for resource_type, ids in ids_by_type.items()
        ]

    def build_rev_include_queries(
        self,
        query_params: QueryParams,
        resources: Sequence[Resource],
        filter_rules: Sequence[QueryClause],
        schema_version: str,
        iterative: bool = False,
    ) -> list[StructuredQuery]:
        """Build queries for the resources that reference resources."""
        directives = _directives(query_params, REVINCLUDE_ITERATE if iterative else REVINCLUDE)
        if not directives:
            return []
        logger.debug("Building %d revinclude queries (schema %s)", len(directives), schema_version)

        queries = []
        for directive in directives:
            references = list(
                dict.fromkeys(
                    f"{resource.get('resourceType')}/{resource.get('id')}"
                    for resource in resources
                    if not directive.target_type or resource.get("resourceType") == directive.target_type
                ),
            )
            if not references:
                continue
            field = self.field_mapper.map_to_field_path(directive.search_parameter)
            queries.append(
                StructuredQuery(
                    target_collection=directive.source_type.lower(),
                    limit=self.result_limit,
                    must=(TermsClause(field=f"{field}.reference.keyword", values=tuple(references)),),
                    filters=tuple(filter_rules),
                ),
            )
        return queries


def _directives(query_params: QueryParams, parameter: str) -> list[InclusionDirective]:
    value = query_params.get(parameter)
    if not value:
        return []
    raw_values = [value] if isinstance(value, str) else value

    directives = []
    for raw in raw_values:
        directive = InclusionDirective.parse(raw)
        if directive is None:
            logger.debug("Ignoring unsupported %s value: %s", parameter, raw)
            continue
        directives.append(directive)
    return directives


def _references_at(resource: Resource, path: str) -> Iterator[Reference]:
    for value in _values_at(resource, path.split(".")):
        if not isinstance(value, str):
            continue
        reference = Reference.parse(value)
        if reference is not None:
            yield reference


def _values_at(node: Any, keys: list[str]) -> Iterable[Any]:
    # Lists are flattened at every level, e.g. performer[].reference
    if isinstance(node, list):
        for item in node:
            yield from _values_at(item, keys)
        return
    if not keys:
        yield node
        return
    if isinstance(node, dict) and keys[0] in node:
        yield from _values_at(node[keys[0]], keys[1:])
