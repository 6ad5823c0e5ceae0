"""
Filter Engine - Conjunctive attribute predicates over scored documents.

Category only constrains works and region only constrains scholars; a record of
another type is never excluded by them. The year range checks the most specific
year-like attribute a record has and leaves records without one in place.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import (
    BiographyMetadata,
    DocumentMetadata,
    ScholarMetadata,
    ScoredDocument,
    SearchFilters,
    WorkMetadata,
)

__all__ = ["year_values", "matches_filters", "apply_filters"]


def year_values(metadata: DocumentMetadata) -> tuple[int, ...]:
    """
    Year-like attribute values of a record.

    Works expose ``year``; biography ``year`` or else ``birth_year``; scholars the
    years of their publications. Empty when the record has none.
    """
    if isinstance(metadata, WorkMetadata):
        return (metadata.year,)
    if isinstance(metadata, BiographyMetadata):
        if metadata.year is not None:
            return (metadata.year,)
        if metadata.birth_year is not None:
            return (metadata.birth_year,)
        return ()
    if isinstance(metadata, ScholarMetadata):
        return metadata.publication_years
    raise TypeError(f"Unknown metadata type {type(metadata).__name__}")


def _matches_category(metadata: DocumentMetadata, categories: frozenset[str]) -> bool:
    if isinstance(metadata, WorkMetadata):
        return metadata.category in categories
    if isinstance(metadata, (ScholarMetadata, BiographyMetadata)):
        return True
    raise TypeError(f"Unknown metadata type {type(metadata).__name__}")


def _matches_region(metadata: DocumentMetadata, regions: frozenset[str]) -> bool:
    if isinstance(metadata, ScholarMetadata):
        return metadata.region in regions
    if isinstance(metadata, (WorkMetadata, BiographyMetadata)):
        return True
    raise TypeError(f"Unknown metadata type {type(metadata).__name__}")


def _matches_year_range(
    metadata: DocumentMetadata, year_range: tuple[float, float]
) -> bool:
    years = year_values(metadata)
    if not years:
        return True
    low, high = year_range
    return any(low <= year <= high for year in years)


def matches_filters(metadata: DocumentMetadata, filters: SearchFilters) -> bool:
    """Whether a record satisfies every present filter dimension."""
    if filters.content_types and metadata.content_type not in filters.content_types:
        return False
    if filters.category and not _matches_category(metadata, filters.category):
        return False
    if filters.region and not _matches_region(metadata, filters.region):
        return False
    if filters.year_range is not None and not _matches_year_range(
        metadata, filters.year_range
    ):
        return False
    return True


def apply_filters(
    results: Iterable[ScoredDocument],
    filters: SearchFilters,
) -> list[ScoredDocument]:
    """Keep the results matching ``filters``, preserving their order."""
    return [r for r in results if matches_filters(r.document.metadata, filters)]
