"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the corpus snapshot and the engines built on it.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from prouvesearch.adapters.content import JSONContentRepository
from prouvesearch.config import get_settings
from prouvesearch.domains.content import CorpusSnapshot
from prouvesearch.domains.recommendation import RecommendationEngine
from prouvesearch.domains.search import ContentSearchEngine, RelevanceScorer

logger = logging.getLogger(__name__)

__all__ = [
    "get_corpus",
    "get_search_engine",
    "get_recommendation_engine",
    "init_services",
    "cleanup_services",
]


@lru_cache
def get_corpus() -> CorpusSnapshot:
    """Get corpus snapshot singleton."""
    settings = get_settings()
    return CorpusSnapshot.from_repository(JSONContentRepository(settings.data_dir))


@lru_cache
def get_search_engine() -> ContentSearchEngine:
    """Get search engine singleton."""
    settings = get_settings()
    return ContentSearchEngine(
        get_corpus(),
        scorer=RelevanceScorer(settings.empty_term_baseline),
        excerpt_length=settings.search_excerpt_length,
        suggestion_min_length=settings.suggestion_min_length,
        suggestion_limit=settings.suggestion_limit,
    )


@lru_cache
def get_recommendation_engine() -> RecommendationEngine:
    """Get recommendation engine singleton."""
    settings = get_settings()
    return RecommendationEngine(
        get_corpus(),
        excerpt_length=settings.recommendation_excerpt_length,
    )


async def init_services() -> None:
    """
    Initialize services on startup.

    Loads the corpus once so a broken data directory fails the start-up
    instead of the first request.
    """
    get_search_engine()
    get_recommendation_engine()


async def cleanup_services() -> None:
    """Drop cached services on shutdown."""
    get_recommendation_engine.cache_clear()
    get_search_engine.cache_clear()
    get_corpus.cache_clear()
    logger.debug("Services released")
