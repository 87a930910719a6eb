"""Immutable engine options resolved once at service construction."""

from dataclasses import dataclass

from resource_search.config import Settings
from resource_search.core.constants import (
    DEFAULT_SEARCH_RESULTS_PER_PAGE,
    ITERATIVE_INCLUSION_PARAMETERS,
    MAX_INCLUDE_ITERATIVE_DEPTH,
    MAX_INCLUSION_PARAM_RESULTS,
    NON_SEARCHABLE_PARAMETERS,
)


@dataclass(frozen=True)
class SearchOptions:
    """Process-wide search constants."""

    non_searchable_parameters: frozenset[str] = frozenset(NON_SEARCHABLE_PARAMETERS)
    iterative_inclusion_parameters: tuple[str, ...] = ITERATIVE_INCLUSION_PARAMETERS
    default_page_size: int = DEFAULT_SEARCH_RESULTS_PER_PAGE
    max_include_iterative_depth: int = MAX_INCLUDE_ITERATIVE_DEPTH
    inclusion_result_limit: int = MAX_INCLUSION_PARAM_RESULTS

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchOptions":
        return cls(
            default_page_size=settings.search_default_page_size,
            max_include_iterative_depth=settings.search_max_include_iterative_depth,
            inclusion_result_limit=settings.search_inclusion_result_limit,
        )
