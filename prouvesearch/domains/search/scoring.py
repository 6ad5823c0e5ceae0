"""
Relevance Scorer - Weighted field matching normalized to [0, 1].

Each content type has a weight table keyed by text-field name. A field that
contains the term (case-insensitive substring) adds its weight once per
occurrence of the field, so a scholar gains the publication weight for every
matching publication. The sum is clamped to SCORE_CEILING and divided by it.

Weights:
    works       title=10, category=5, location=5, description=2
    scholars    name=10, institution=8, specialization=6, biography=4, publication=2
    biography   title=10, people=8, organization=6, place=5, body=3, details=3, source=2
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from prouvesearch.domains.content.models import ContentType

from .models import SearchableDocument

__all__ = [
    "WORK_FIELD_WEIGHTS",
    "SCHOLAR_FIELD_WEIGHTS",
    "BIOGRAPHY_FIELD_WEIGHTS",
    "SCORE_CEILING",
    "DEFAULT_EMPTY_TERM_BASELINE",
    "RelevanceScorer",
]

WORK_FIELD_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {"title": 10, "category": 5, "location": 5, "description": 2}
)
SCHOLAR_FIELD_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {"name": 10, "institution": 8, "specialization": 6, "biography": 4, "publication": 2}
)
BIOGRAPHY_FIELD_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {
        "title": 10,
        "people": 8,
        "organization": 6,
        "place": 5,
        "body": 3,
        "details": 3,
        "source": 2,
    }
)

SCORE_CEILING = 10
DEFAULT_EMPTY_TERM_BASELINE = 0.5


def weights_for(content_type: ContentType) -> Mapping[str, int]:
    """Weight table of a content type."""
    if content_type == ContentType.WORK:
        return WORK_FIELD_WEIGHTS
    if content_type == ContentType.SCHOLAR:
        return SCHOLAR_FIELD_WEIGHTS
    if content_type == ContentType.BIOGRAPHY:
        return BIOGRAPHY_FIELD_WEIGHTS
    raise TypeError(f"No weight table for content type {content_type!r}")


class RelevanceScorer:
    """
    Per-type weighted relevance scorer.

    Example:
        >>> scorer = RelevanceScorer()
        >>> scorer.score(document, "maison")
        1.0
    """

    def __init__(self, empty_term_baseline: float = DEFAULT_EMPTY_TERM_BASELINE) -> None:
        """
        Initialize scorer.

        Args:
            empty_term_baseline: Score every document gets for a blank term
        """
        if not 0.0 <= empty_term_baseline <= 1.0:
            raise ValueError("empty_term_baseline must lie in [0, 1]")
        self._baseline = empty_term_baseline

    @property
    def baseline(self) -> float:
        """Score assigned to every document for a blank term."""
        return self._baseline

    def raw_score(self, document: SearchableDocument, term: str) -> int:
        """Unnormalized sum of weights of the fields containing ``term``."""
        needle = term.strip().casefold()
        if not needle:
            return 0
        weights = weights_for(document.content_type)
        return sum(
            weights[text_field.name]
            for text_field in document.text_fields
            if text_field.matches(needle)
        )

    def score(self, document: SearchableDocument, term: str) -> float:
        """Relevance of ``document`` for ``term`` in [0, 1]."""
        if not term.strip():
            return self._baseline
        return min(self.raw_score(document, term), SCORE_CEILING) / SCORE_CEILING
