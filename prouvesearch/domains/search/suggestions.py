"""
Suggestion Generator - Autocomplete strings for partial search input.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from prouvesearch.domains.content.snapshot import CorpusSnapshot

logger = logging.getLogger(__name__)

__all__ = ["DOMAIN_VOCABULARY", "SuggestionGenerator"]

DOMAIN_VOCABULARY: tuple[str, ...] = (
    "传记",
    "生平",
    "教育",
    "职业",
    "哲学",
    "合作",
    "遗产",
    "biography",
    "education",
    "career",
    "philosophy",
    "collaboration",
    "legacy",
    "prefabrication",
)


class SuggestionGenerator:
    """
    Case-insensitive substring suggestions over corpus names and a fixed vocabulary.

    Candidates are considered in a fixed order (work titles, locations and
    categories, then scholar names and institutions, then the vocabulary) and
    the first ``limit`` distinct matches are returned.
    """

    def __init__(
        self,
        corpus: CorpusSnapshot,
        min_length: int = 2,
        limit: int = 8,
        vocabulary: Iterable[str] = DOMAIN_VOCABULARY,
    ) -> None:
        """
        Initialize generator.

        Args:
            corpus: Corpus snapshot to draw names from
            min_length: Shortest partial that produces suggestions
            limit: Maximum number of suggestions
            vocabulary: Extra domain terms offered alongside corpus names
        """
        if limit < 0:
            raise ValueError("limit must not be negative")
        self._min_length = max(min_length, 1)
        self._limit = limit
        self._candidates = tuple(dict.fromkeys(self._collect(corpus, vocabulary)))

    @staticmethod
    def _collect(corpus: CorpusSnapshot, vocabulary: Iterable[str]) -> Iterator[str]:
        for work in corpus.works:
            yield work.title
            yield work.location
            yield work.category.name
        for scholar in corpus.scholars:
            yield scholar.name
            yield scholar.institution
        yield from vocabulary

    def suggest(self, partial: str) -> list[str]:
        """Suggestions containing ``partial``; empty below the minimum length."""
        if len(partial) < self._min_length or not partial.strip():
            return []

        needle = partial.casefold()
        suggestions = []
        for candidate in self._candidates:
            if len(suggestions) >= self._limit:
                break
            if candidate and needle in candidate.casefold():
                suggestions.append(candidate)

        logger.debug("Suggestions for '%s': %d", partial, len(suggestions))
        return suggestions
