"""Offset/limit arithmetic and page link construction."""

from dataclasses import dataclass
from urllib.parse import urlencode

from resource_search.core.constants import COUNT, PAGES_OFFSET
from resource_search.type_aliases import QueryParams


@dataclass(frozen=True)
class PaginationLinks:
    previous_result_url: str | None = None
    next_result_url: str | None = None


def build_pagination_links(
    base_url: str,
    resource_type: str,
    query_params: QueryParams,
    total: int,
    offset: int,
    size: int,
) -> PaginationLinks:
    """Build the previous/next page links for a page of matches.

    The previous link exists whenever offset > 0. Its offset is clamped at 0,
    so a page that started mid-way links back to the very first page.
    The next link exists while offset + size < total.
    """
    previous_result_url = None
    if offset > 0:
        previous_result_url = create_url(
            base_url,
            resource_type,
            _with_page(query_params, max(offset - size, 0), size),
        )

    next_result_url = None
    if offset + size < total:
        next_result_url = create_url(
            base_url,
            resource_type,
            _with_page(query_params, offset + size, size),
        )

    return PaginationLinks(previous_result_url=previous_result_url, next_result_url=next_result_url)


def create_url(base_url: str, resource_type: str, query: QueryParams) -> str:
    """Build "{base_url}/{resource_type}?{query}", repeating keys for list values."""
    url = f"{base_url.rstrip('/')}/{resource_type}"
    if not query:
        return url
    return f"{url}?{urlencode(query, doseq=True)}"


def _with_page(query_params: QueryParams, offset: int, size: int) -> QueryParams:
    # Original parameters keep their order; only offset and size are overridden
    return {**query_params, PAGES_OFFSET: str(offset), COUNT: str(size)}
