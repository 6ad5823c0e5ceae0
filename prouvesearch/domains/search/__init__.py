"""
Search Domain - Unified content search.

This domain handles:
- Document normalization across works, scholars and biography
- Query validation
- Weighted relevance scoring
- Attribute filtering and deterministic sorting
- Excerpts and autocomplete suggestions
"""

from .contracts import Scorer, SearchEngine
from .engine import ContentSearchEngine
from .excerpt import excerpt
from .models import (
    AvailableFilters,
    FilterOption,
    SearchableDocument,
    SearchFilters,
    SearchPage,
    SearchQuery,
    SearchResult,
    SortOption,
)
from .scoring import RelevanceScorer
from .validator import parse_search_query, query_errors, validate_search_query

__all__ = [
    # Contracts
    "SearchEngine",
    "Scorer",
    # Models
    "SortOption",
    "SearchFilters",
    "SearchQuery",
    "SearchResult",
    "SearchPage",
    "SearchableDocument",
    "FilterOption",
    "AvailableFilters",
    # Implementations
    "ContentSearchEngine",
    "RelevanceScorer",
    "excerpt",
    "parse_search_query",
    "query_errors",
    "validate_search_query",
]
