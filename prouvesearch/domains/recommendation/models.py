"""
Recommendation Models - Data types for recommendation domain.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from prouvesearch.domains.content.models import ContentType

ALL_CONTENT_TYPES: frozenset[ContentType] = frozenset(ContentType)


class RecommendationOptions(BaseModel):
    """
    Options shared by every recommendation call.

    ``max_results`` of None means the default of the recommendation kind.
    """

    max_results: int | None = Field(default=None, ge=1)
    include_types: frozenset[ContentType] = ALL_CONTENT_TYPES
    exclude_ids: frozenset[str] = frozenset()

    model_config = {"frozen": True}

    def excluding(self, ids: frozenset[str] | set[str] | list[str]) -> RecommendationOptions:
        """Copy of these options with ``ids`` added to the exclusion list."""
        return self.model_copy(update={"exclude_ids": self.exclude_ids | frozenset(ids)})


class RecommendationItem(BaseModel):
    """Related item surfaced for a seed entity."""

    id: str
    content_type: ContentType
    title: str
    excerpt: str
    relevance_score: float = Field(ge=0.0, le=1.0)
    reason: str = Field(min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)
