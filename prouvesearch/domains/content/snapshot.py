"""
Corpus Snapshot - Immutable, in-memory view of the archive corpus.

The snapshot is built once (at API start-up or CLI invocation) from a
ContentRepository and shared read-only by every search and recommendation call.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from prouvesearch.config.errors import CorpusError

from .contracts import ContentRepository
from .models import BiographyFact, BiographySection, Scholar, Work

logger = logging.getLogger(__name__)

__all__ = ["CorpusSnapshot"]


@dataclass(frozen=True)
class CorpusSnapshot:
    """
    Frozen collection of works, scholars and biography facts.

    Record ids are unique across all three collections, so an id alone names
    one record wherever ids are compared (exclusions, history, lookups).

    Example:
        >>> corpus = CorpusSnapshot.from_repository(JSONContentRepository())
        >>> corpus.get_work("maison-tropicale").year
        1949
    """

    works: tuple[Work, ...] = ()
    scholars: tuple[Scholar, ...] = ()
    biography: tuple[BiographyFact, ...] = ()
    _works_by_id: Mapping[str, Work] = field(init=False, repr=False, compare=False)
    _scholars_by_id: Mapping[str, Scholar] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "works", tuple(self.works))
        object.__setattr__(self, "scholars", tuple(self.scholars))
        object.__setattr__(self, "biography", tuple(self.biography))
        self._check_unique_ids()
        object.__setattr__(
            self, "_works_by_id", MappingProxyType({w.id: w for w in self.works})
        )
        object.__setattr__(
            self, "_scholars_by_id", MappingProxyType({s.id: s for s in self.scholars})
        )

    def _check_unique_ids(self) -> None:
        collections = (self.works, self.scholars, self.biography)
        counts = Counter(record.id for records in collections for record in records)
        duplicates = sorted(record_id for record_id, count in counts.items() if count > 1)
        if duplicates:
            raise CorpusError("Duplicate record ids in corpus", details={"ids": duplicates})

    @classmethod
    def from_repository(cls, repository: ContentRepository) -> CorpusSnapshot:
        """Build the snapshot by enumerating every collection of a repository once."""
        snapshot = cls(
            works=tuple(repository.list_works()),
            scholars=tuple(repository.list_scholars()),
            biography=tuple(repository.list_biography_facts()),
        )
        logger.info(
            "Corpus snapshot built: works=%d scholars=%d biography=%d",
            len(snapshot.works),
            len(snapshot.scholars),
            len(snapshot.biography),
        )
        return snapshot

    def get_work(self, work_id: str) -> Work | None:
        """Get a work by ID."""
        return self._works_by_id.get(work_id)

    def get_scholar(self, scholar_id: str) -> Scholar | None:
        """Get a scholar by ID."""
        return self._scholars_by_id.get(scholar_id)

    def biography_section(self, section: BiographySection) -> tuple[BiographyFact, ...]:
        """Biography facts of one section, in corpus order."""
        return tuple(fact for fact in self.biography if fact.section == section)

    def find_biography_fact(self, fact_id: str) -> BiographyFact | None:
        """Get a biography fact by ID."""
        return next((fact for fact in self.biography if fact.id == fact_id), None)

    @property
    def size(self) -> int:
        """Total number of records."""
        return len(self.works) + len(self.scholars) + len(self.biography)

