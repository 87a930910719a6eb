"""Mapping from logical search parameters to document field paths."""

from collections.abc import Mapping
from types import MappingProxyType

# Parameters whose document field differs from the parameter name
DEFAULT_FIELD_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "_id": "id",
        "_lastUpdated": "meta.lastUpdated",
        "_profile": "meta.profile",
        "_security": "meta.security",
        "_source": "meta.source",
        "_tag": "meta.tag",
    },
)


class FieldMapper:
    """Static lookup table for search parameter field paths.

    Parameters missing from the table map to a field of the same name.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None):
        mapping = dict(DEFAULT_FIELD_MAPPING)
        if overrides:
            mapping.update(overrides)
        self._mapping: Mapping[str, str] = MappingProxyType(mapping)

    def map_to_field_path(self, search_parameter: str) -> str:
        return self._mapping.get(search_parameter, search_parameter)
