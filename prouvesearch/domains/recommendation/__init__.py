"""
Recommendation Domain - Related content for cross-linking.

This domain handles:
- Work, scholar and biography-section seeded recommendations
- Featured, trending and history-aware landing page content
- Attribute similarity and specialization relevance tables
"""

from .contracts import Recommender
from .engine import RecommendationEngine, work_similarity
from .models import RecommendationItem, RecommendationOptions

__all__ = [
    # Contracts
    "Recommender",
    # Models
    "RecommendationItem",
    "RecommendationOptions",
    # Implementations
    "RecommendationEngine",
    "work_similarity",
]
