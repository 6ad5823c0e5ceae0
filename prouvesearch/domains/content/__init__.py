"""
Content Domain - Read-only records of the archive corpus.

This domain handles:
- Work, scholar and biography record models
- The repository contract the corpus is read through
- The immutable corpus snapshot shared by search and recommendations
"""

from .contracts import ContentRepository
from .models import (
    BiographyFact,
    BiographySection,
    ContactInfo,
    ContentType,
    Exhibition,
    Publication,
    PublicationType,
    Scholar,
    Work,
    WorkCategory,
    WorkStatus,
    region_display_name,
)
from .snapshot import CorpusSnapshot

__all__ = [
    # Contracts
    "ContentRepository",
    # Models
    "ContentType",
    "WorkStatus",
    "PublicationType",
    "BiographySection",
    "WorkCategory",
    "Work",
    "ContactInfo",
    "Publication",
    "Exhibition",
    "Scholar",
    "BiographyFact",
    "region_display_name",
    # Snapshot
    "CorpusSnapshot",
]
