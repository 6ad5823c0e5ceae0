"""
Recommendation Routes - Related content for works, scholars and biography sections.

Every endpoint accepts the same options:
- **max_results**: Maximum items (defaults depend on the recommendation kind)
- **include_types**: Repeatable; work, scholar, biography
- **exclude_ids**: Repeatable; ids never returned

Unknown seed ids return an empty list rather than 404.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from prouvesearch.domains.content import ContentType
from prouvesearch.domains.recommendation import (
    RecommendationEngine,
    RecommendationItem,
    RecommendationOptions,
)
from prouvesearch.domains.recommendation.models import ALL_CONTENT_TYPES
from prouvesearch.interfaces.api.deps import get_recommendation_engine

router = APIRouter()


class RecommendationResponse(BaseModel):
    """Recommendation list response."""

    items: list[RecommendationItem]
    total: int


def recommendation_options(
    max_results: int | None = Query(default=None, ge=1, le=50),
    include_types: list[ContentType] | None = Query(default=None),
    exclude_ids: list[str] | None = Query(default=None),
) -> RecommendationOptions:
    """Build recommendation options from query parameters."""
    return RecommendationOptions(
        max_results=max_results,
        include_types=frozenset(include_types) if include_types else ALL_CONTENT_TYPES,
        exclude_ids=frozenset(exclude_ids or ()),
    )


def _respond(items: list[RecommendationItem]) -> RecommendationResponse:
    return RecommendationResponse(items=items, total=len(items))


@router.get("", response_model=RecommendationResponse)
async def general_recommendations(
    options: RecommendationOptions = Depends(recommendation_options),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Featured works, scholars and biography highlights."""
    return _respond(engine.get_general_recommendations(options))


@router.get("/trending", response_model=RecommendationResponse)
async def trending_content(
    options: RecommendationOptions = Depends(recommendation_options),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Trending content."""
    return _respond(engine.get_trending_content(options))


@router.get("/personalized", response_model=RecommendationResponse)
async def personalized_recommendations(
    history: list[str] | None = Query(default=None, description="Viewed record ids"),
    options: RecommendationOptions = Depends(recommendation_options),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Featured content the visitor has not viewed yet."""
    return _respond(engine.get_personalized_recommendations(history or [], options))


@router.get("/works/{work_id}", response_model=RecommendationResponse)
async def work_recommendations(
    work_id: str,
    options: RecommendationOptions = Depends(recommendation_options),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Works, scholars and biography facts related to a work."""
    return _respond(engine.get_work_recommendations(work_id, options))


@router.get("/scholars/{scholar_id}", response_model=RecommendationResponse)
async def scholar_recommendations(
    scholar_id: str,
    options: RecommendationOptions = Depends(recommendation_options),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Works, scholars and biography facts related to a scholar's research."""
    return _respond(engine.get_scholar_recommendations(scholar_id, options))


@router.get("/biography/{section}", response_model=RecommendationResponse)
async def biography_recommendations(
    section: str,
    options: RecommendationOptions = Depends(recommendation_options),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Works and scholars related to a biography section."""
    return _respond(engine.get_biography_recommendations(section, options))
