"""Pydantic models for the resource search pipeline.

This module contains the request and result structures exchanged with
callers of the search service.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .type_aliases import QueryParams, Resource


class SearchMode(str, Enum):
    """How a resource entered the result."""

    MATCH = "match"
    INCLUDE = "include"


class _BundleModel(BaseModel):
    """Base for models serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_bundle_dict(self) -> dict[str, Any]:
        """Dump with camelCase keys, omitting unset optional links."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SearchRequest(_BundleModel):
    """A type-level search request."""

    resource_type: str = Field(min_length=1, description="Resource type being searched")
    query_params: QueryParams = Field(
        default_factory=dict,
        description="Query parameters in request order",
    )
    base_url: str = Field(description="Base URL used to build fullUrl and page links")
    allowed_resource_types: list[str] = Field(
        default_factory=list,
        description="Resource types the caller may read; inclusions outside it are dropped",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise the base URL so paths can be appended."""
        return v.rstrip("/")


class EntrySearch(_BundleModel):
    """Search metadata of a bundle entry."""

    mode: SearchMode


class SearchEntry(_BundleModel):
    """A single resource in the search result."""

    search: EntrySearch
    full_url: str
    resource: Resource

    @property
    def mode(self) -> SearchMode:
        return self.search.mode

    @property
    def key(self) -> str:
        return resource_key(self.resource)


class SearchResult(_BundleModel):
    """Paginated search result.

    number_of_results counts only the primary matches, never the included
    resources.
    """

    number_of_results: int = Field(ge=0)
    entries: list[SearchEntry] = Field(default_factory=list)
    message: str = ""
    previous_result_url: str | None = None
    next_result_url: str | None = None


def resource_key(resource: Resource) -> str:
    """Identity of a resource across collections: "{resourceType}/{id}"."""
    return f"{resource.get('resourceType')}/{resource.get('id')}"
