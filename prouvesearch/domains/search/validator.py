"""
Query Validator - Shape and range checks before a query is executed.

Validation never raises: malformed input yields False (or None from
parse_search_query) and the query is not executed.

Raw mappings must carry all three query keys (``term``, ``filters`` and
``sortBy``/``sort_by``); a missing key is a rejection, not a default. Callers
that build a SearchQuery directly keep the model defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .models import SearchQuery

logger = logging.getLogger(__name__)

__all__ = ["parse_search_query", "validate_search_query", "query_errors", "describe_errors"]

# Wire name reported when missing, followed by every accepted spelling
_REQUIRED_KEYS = (
    ("term", ("term",)),
    ("filters", ("filters",)),
    ("sortBy", ("sortBy", "sort_by")),
)


def _missing_keys(query: Any) -> list[str]:
    if not isinstance(query, Mapping):
        return []
    return [
        name for name, spellings in _REQUIRED_KEYS if not any(key in query for key in spellings)
    ]


def _check(query: Any) -> tuple[SearchQuery | None, list[str]]:
    if isinstance(query, SearchQuery):
        return query, []
    missing = _missing_keys(query)
    if missing:
        return None, [f"{name}: Field required" for name in missing]
    try:
        return SearchQuery.model_validate(query), []
    except ValidationError as e:
        return None, describe_errors(e)


def parse_search_query(query: Any) -> SearchQuery | None:
    """
    Validate raw input and return it as a SearchQuery.

    Accepts a SearchQuery or a mapping using snake_case or camelCase keys.

    Returns:
        The validated query, or None when the input is rejected
    """
    parsed, errors = _check(query)
    if parsed is None:
        logger.debug("Rejected search query: %s", errors)
    return parsed


def validate_search_query(query: Any) -> bool:
    """
    Check a query before execution.

    Rejects a missing query key, a non-string term, an unknown sort option, a
    filters value that is not a mapping, unknown content types, and a year range
    with non-numeric bounds or minimum above maximum.
    """
    return parse_search_query(query) is not None


def query_errors(query: Any) -> list[str]:
    """Readable problems of a raw query; empty when the query is valid."""
    return _check(query)[1]


def describe_errors(error: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into readable ``location: message`` lines."""
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "query"
        lines.append(f"{location}: {item['msg']}")
    return lines
