"""
Sort Engine - Deterministic orderings of scored documents.

All orderings use Python's stable sort, so equal keys keep insertion order and
every ordering is total. Text comparisons follow zh-CN conventions: Han
characters are transliterated to tone-numbered pinyin (pypinyin) and the
result is compared with Unicode Collation Algorithm keys (pyuca), so Chinese
titles order by reading and accented Latin titles sort next to their base
letters.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from pypinyin import Style, lazy_pinyin
from pyuca import Collator

from .filters import year_values
from .models import (
    BiographyMetadata,
    DocumentMetadata,
    ScholarMetadata,
    ScoredDocument,
    SortOption,
    WorkMetadata,
)

__all__ = ["collation_key", "sort_year", "secondary_key", "sort_results"]


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def _pinyin(text: str) -> str:
    # Non-Han runs come back unchanged
    return " ".join(lazy_pinyin(text, style=Style.TONE3, neutral_tone_with_five=True))


@lru_cache(maxsize=4096)
def collation_key(text: str) -> tuple[tuple[int, ...], tuple[int, ...], str]:
    """
    Locale-aware sort key.

    Orders by the pinyin reading first, then by the original characters so
    homophones stay distinct, and finally by casefolded text.
    """
    collator = _collator()
    return (
        tuple(collator.sort_key(_pinyin(text))),
        tuple(collator.sort_key(text)),
        text.casefold(),
    )


def sort_year(metadata: DocumentMetadata) -> int | None:
    """Year used for recency ordering: the latest year-like value, if any."""
    years = year_values(metadata)
    return max(years) if years else None


def secondary_key(document_title: str, metadata: DocumentMetadata) -> str:
    """Type-specific secondary field: location for works, name for scholars."""
    if isinstance(metadata, WorkMetadata):
        return metadata.location
    if isinstance(metadata, ScholarMetadata):
        return metadata.name
    if isinstance(metadata, BiographyMetadata):
        return document_title
    raise TypeError(f"Unknown metadata type {type(metadata).__name__}")


def _by_year(results: Sequence[ScoredDocument]) -> list[ScoredDocument]:
    def key(result: ScoredDocument) -> tuple[int, int]:
        year = sort_year(result.document.metadata)
        # Missing years sort last
        return (1, 0) if year is None else (0, -year)

    return sorted(results, key=key)


def _by_title(results: Sequence[ScoredDocument]) -> list[ScoredDocument]:
    return sorted(results, key=lambda r: collation_key(r.document.title))


def _by_secondary(results: Sequence[ScoredDocument]) -> list[ScoredDocument]:
    return sorted(
        results,
        key=lambda r: (
            collation_key(secondary_key(r.document.title, r.document.metadata)),
            collation_key(r.document.title),
        ),
    )


def sort_results(
    results: Sequence[ScoredDocument],
    sort_by: SortOption,
    term: str = "",
) -> list[ScoredDocument]:
    """
    Order results.

    Args:
        results: Scored documents in insertion order
        sort_by: Requested ordering
        term: Query term; a blank term turns relevance ordering into year ordering

    Returns:
        New list in the requested order
    """
    if sort_by == SortOption.RELEVANCE:
        if not term.strip():
            return _by_year(results)
        return sorted(results, key=lambda r: -r.score)
    if sort_by == SortOption.YEAR:
        return _by_year(results)
    if sort_by == SortOption.TITLE:
        return _by_title(results)
    if sort_by == SortOption.SECONDARY:
        return _by_secondary(results)
    raise ValueError(f"Unknown sort option {sort_by!r}")
