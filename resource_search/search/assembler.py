"""Conversion of raw backend hits into search entries."""

from collections.abc import Iterable

from resource_search.models import EntrySearch, SearchEntry, SearchMode
from resource_search.type_aliases import CleanUpFunction, Resource, SearchHit


def pass_through(resource: Resource) -> Resource:
    return resource


def hits_to_search_entries(
    hits: Iterable[SearchHit],
    base_url: str,
    mode: SearchMode = SearchMode.MATCH,
    clean_up: CleanUpFunction = pass_through,
) -> list[SearchEntry]:
    """Map hits to entries tagged with mode.

    The cleanup function runs before the logical resourceType and id are
    read, so storage-internal ids never leak into fullUrl.
    """
    entries = []
    for hit in hits:
        resource = clean_up(hit["_source"])
        entries.append(
            SearchEntry(
                search=EntrySearch(mode=mode),
                full_url=f"{base_url.rstrip('/')}/{resource['resourceType']}/{resource['id']}",
                resource=resource,
            ),
        )
    return entries
