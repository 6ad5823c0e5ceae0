"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import AvailableFilters, SearchableDocument, SearchQuery, SearchResult


@runtime_checkable
class SearchEngine(Protocol):
    """Contract for unified content search implementations."""

    def validate_search_query(self, query: Any) -> bool:
        """Check a raw query before execution."""
        ...

    def perform_search(self, query: SearchQuery) -> list[SearchResult]:
        """Execute search and return ordered results."""
        ...

    def get_available_filters(self) -> AvailableFilters:
        """Aggregate filter dimensions from the corpus."""
        ...

    def get_search_suggestions(self, partial_term: str) -> list[str]:
        """Autocomplete strings for a partial term."""
        ...


@runtime_checkable
class Scorer(Protocol):
    """Contract for relevance scoring implementations."""

    def score(self, document: SearchableDocument, term: str) -> float:
        """Relevance of a document for a term in [0, 1]."""
        ...
