"""
Content Search Engine - Unified search over works, scholars and biography.

Pipeline:
- Normalize the corpus once into searchable documents
- Score every document against the term
- Filter by type, category, region and year range
- Sort by relevance, year, title or secondary key
- Bound each result's text with the excerpt generator
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from prouvesearch.domains.content.models import ContentType, region_display_name
from prouvesearch.domains.content.snapshot import CorpusSnapshot

from .contracts import Scorer
from .excerpt import excerpt
from .filters import apply_filters
from .models import (
    AvailableFilters,
    FilterOption,
    ScoredDocument,
    SearchableDocument,
    SearchPage,
    SearchQuery,
    SearchResult,
)
from .normalizer import normalize_corpus
from .scoring import RelevanceScorer
from .sorting import sort_results
from .suggestions import SuggestionGenerator
from .validator import parse_search_query, validate_search_query

logger = logging.getLogger(__name__)

__all__ = ["ContentSearchEngine", "CONTENT_TYPE_NAMES"]

CONTENT_TYPE_NAMES: dict[ContentType, str] = {
    ContentType.WORK: "Architectural works",
    ContentType.SCHOLAR: "Scholars",
    ContentType.BIOGRAPHY: "Biography",
}


class ContentSearchEngine:
    """
    Search engine over an immutable corpus snapshot.

    The snapshot is normalized once in the constructor; the engine holds no other
    state, so one instance can serve concurrent callers.

    Example:
        >>> engine = ContentSearchEngine(corpus)
        >>> results = engine.perform_search(SearchQuery(term="maison"))
    """

    def __init__(
        self,
        corpus: CorpusSnapshot,
        scorer: Scorer | None = None,
        excerpt_length: int = 150,
        suggestion_min_length: int = 2,
        suggestion_limit: int = 8,
    ) -> None:
        """
        Initialize search engine.

        Args:
            corpus: Corpus snapshot to search
            scorer: Relevance scorer (default: weighted field scorer, baseline 0.5)
            excerpt_length: Maximum excerpt length before the ellipsis
            suggestion_min_length: Shortest partial term that gets suggestions
            suggestion_limit: Maximum number of suggestions
        """
        self._corpus = corpus
        self._scorer = scorer or RelevanceScorer()
        self._excerpt_length = excerpt_length
        self._documents: tuple[SearchableDocument, ...] = normalize_corpus(corpus)
        self._suggestions = SuggestionGenerator(
            corpus,
            min_length=suggestion_min_length,
            limit=suggestion_limit,
        )
        logger.info("Search engine ready: %d documents", len(self._documents))

    @property
    def documents(self) -> tuple[SearchableDocument, ...]:
        """Normalized corpus in insertion order."""
        return self._documents

    def validate_search_query(self, query: Any) -> bool:
        """Check a raw query before execution."""
        return validate_search_query(query)

    def parse_search_query(self, query: Any) -> SearchQuery | None:
        """Validate a raw query, returning None when it is rejected."""
        return parse_search_query(query)

    def perform_search(self, query: SearchQuery) -> list[SearchResult]:
        """
        Execute search.

        A blank term matches every document at the scorer's baseline; a non-blank
        term only returns documents with a positive score.

        Args:
            query: Validated search query

        Returns:
            Results ordered by ``query.sort_by``
        """
        has_term = bool(query.term.strip())
        scored = []
        for document in self._documents:
            score = self._scorer.score(document, query.term)
            if has_term and score <= 0.0:
                continue
            scored.append(ScoredDocument(document=document, score=score))

        filtered = apply_filters(scored, query.filters)
        ordered = sort_results(filtered, query.sort_by, query.term)
        results = [self._to_result(item) for item in ordered]

        logger.info(
            "Search: term='%s' sort=%s -> %d results (matched=%d)",
            query.term[:50],
            query.sort_by.value,
            len(results),
            len(scored),
        )
        return results

    def search_page(
        self,
        query: SearchQuery,
        page: int = 1,
        page_size: int = 20,
    ) -> SearchPage:
        """
        Execute search and return one page of the ordered results.

        Raises:
            ValueError: If page or page_size is below 1
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be at least 1")

        results = self.perform_search(query)
        start = (page - 1) * page_size
        return SearchPage(
            items=results[start : start + page_size],
            total_count=len(results),
            page=page,
            page_size=page_size,
            has_next_page=start + page_size < len(results),
            has_previous_page=page > 1,
        )

    def get_available_filters(self) -> AvailableFilters:
        """Aggregate filter dimensions with record counts from the corpus."""
        corpus = self._corpus

        type_counts = Counter(doc.content_type for doc in self._documents)
        types = [
            FilterOption(id=ct.value, name=name, count=type_counts.get(ct, 0))
            for ct, name in CONTENT_TYPE_NAMES.items()
        ]

        category_names: dict[str, str] = {}
        category_counts: Counter[str] = Counter()
        for work in corpus.works:
            category_names.setdefault(work.category.id, work.category.name)
            category_counts[work.category.id] += 1
        categories = [
            FilterOption(id=cid, name=name, count=category_counts[cid])
            for cid, name in category_names.items()
        ]

        region_counts = Counter(scholar.region for scholar in corpus.scholars)
        regions = [
            FilterOption(id=rid, name=region_display_name(rid), count=count)
            for rid, count in region_counts.items()
        ]

        years = [work.year for work in corpus.works]
        years.extend(y for scholar in corpus.scholars for y in scholar.publication_years)
        for fact in corpus.biography:
            years.extend(
                y for y in (fact.year, fact.birth_year, fact.death_year) if y is not None
            )

        return AvailableFilters(
            types=types,
            categories=categories,
            regions=regions,
            year_range=(min(years), max(years)) if years else None,
        )

    def get_search_suggestions(self, partial_term: str) -> list[str]:
        """Autocomplete strings containing ``partial_term``."""
        return self._suggestions.suggest(partial_term)

    def _to_result(self, item: ScoredDocument) -> SearchResult:
        document = item.document
        return SearchResult(
            id=document.id,
            content_type=document.content_type,
            title=document.title,
            excerpt=excerpt(document.summary, self._excerpt_length),
            relevance_score=item.score,
            metadata=document.metadata.model_dump(mode="json", exclude={"content_type"}),
        )
