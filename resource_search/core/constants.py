"""Search-wide constants for the resource search engine.

This module contains the fixed parameter names and limits used by the
search orchestration engine.
"""

# ========================================
# Control Parameters
# ========================================

PAGES_OFFSET = "_getpagesoffset"  # Pagination offset
COUNT = "_count"  # Page size
FORMAT = "_format"  # Response format, never searchable

INCLUDE = "_include"
REVINCLUDE = "_revinclude"
INCLUDE_ITERATE = "_include:iterate"
REVINCLUDE_ITERATE = "_revinclude:iterate"

ITERATIVE_INCLUSION_PARAMETERS = (INCLUDE_ITERATE, REVINCLUDE_ITERATE)

NON_SEARCHABLE_PARAMETERS = (
    PAGES_OFFSET,
    COUNT,
    FORMAT,
    INCLUDE,
    REVINCLUDE,
    *ITERATIVE_INCLUSION_PARAMETERS,
)

# ========================================
# Limits
# ========================================

DEFAULT_SEARCH_RESULTS_PER_PAGE = 20
MAX_INCLUDE_ITERATIVE_DEPTH = 5  # Rounds of _include:iterate expansion
MAX_INCLUSION_PARAM_RESULTS = 1000  # Size of each inclusion query

# ========================================
# Defaults
# ========================================

DEFAULT_SCHEMA_VERSION = "4.0.1"

# Backend error type raised for collections that were never written to
INDEX_NOT_FOUND_EXCEPTION = "index_not_found_exception"
