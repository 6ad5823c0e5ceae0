"""
Recommendation Contracts - Interfaces for recommendation domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from prouvesearch.domains.content.models import BiographySection

from .models import RecommendationItem, RecommendationOptions


@runtime_checkable
class Recommender(Protocol):
    """Contract for related-content recommenders."""

    def get_work_recommendations(
        self, work_id: str, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        """Items related to a work; empty for an unknown id."""
        ...

    def get_scholar_recommendations(
        self, scholar_id: str, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        """Items related to a scholar; empty for an unknown id."""
        ...

    def get_biography_recommendations(
        self, section: BiographySection | str, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        """Items related to a biography section."""
        ...

    def get_general_recommendations(
        self, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        """Featured items for landing pages."""
        ...
