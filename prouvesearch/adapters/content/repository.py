"""
Content Repository - Read-only access to the archive corpus.

Features:
- JSON corpus bundled with the package (works, scholars, biography)
- Optional data directory override for curated corpora
- Schema validation through pydantic on load
- In-memory repository for tests and embedding
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from prouvesearch.config.errors import CorpusError, ErrorCode
from prouvesearch.domains.content.models import BiographyFact, Scholar, Work

logger = logging.getLogger(__name__)

__all__ = ["BUNDLED_DATA_DIR", "JSONContentRepository", "InMemoryContentRepository"]

BUNDLED_DATA_DIR = Path(__file__).parent / "data"

WORKS_FILE = "works.json"
SCHOLARS_FILE = "scholars.json"
BIOGRAPHY_FILE = "biography.json"

T = TypeVar("T")


class JSONContentRepository:
    """
    Repository reading the corpus from JSON files.

    Each collection lives in its own file holding a JSON array of records.

    Example:
        >>> repo = JSONContentRepository()
        >>> works = repo.list_works()
        >>> works[0].id
        'maison-tropicale'
    """

    def __init__(self, data_dir: str | Path | None = None) -> None:
        """
        Initialize repository.

        Args:
            data_dir: Directory holding works.json, scholars.json and biography.json
                (default: corpus bundled with the package)
        """
        self.data_dir = Path(data_dir) if data_dir is not None else BUNDLED_DATA_DIR

    def _load(self, filename: str, record_type: type[T]) -> list[T]:
        """Read and validate one collection file."""
        path = self.data_dir / filename
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise CorpusError(
                f"Corpus file unavailable: {path}",
                details={"path": str(path), "reason": str(e)},
                code=ErrorCode.CORPUS_UNAVAILABLE,
            ) from e

        try:
            records = TypeAdapter(list[record_type]).validate_json(raw)
        except ValidationError as e:
            raise CorpusError(
                f"Corpus file invalid: {path}",
                details={"path": str(path), "errors": e.error_count()},
            ) from e

        logger.debug("Loaded %d records from %s", len(records), path)
        return records

    def list_works(self) -> list[Work]:
        """Enumerate architectural works."""
        return self._load(WORKS_FILE, Work)

    def list_scholars(self) -> list[Scholar]:
        """Enumerate scholars."""
        return self._load(SCHOLARS_FILE, Scholar)

    def list_biography_facts(self) -> list[BiographyFact]:
        """Enumerate biography facts and timeline entries."""
        return self._load(BIOGRAPHY_FILE, BiographyFact)


class InMemoryContentRepository:
    """Repository over records already held in memory."""

    def __init__(
        self,
        works: Iterable[Work] = (),
        scholars: Iterable[Scholar] = (),
        biography: Iterable[BiographyFact] = (),
    ) -> None:
        self._works = list(works)
        self._scholars = list(scholars)
        self._biography = list(biography)

    def list_works(self) -> list[Work]:
        return list(self._works)

    def list_scholars(self) -> list[Scholar]:
        return list(self._scholars)

    def list_biography_facts(self) -> list[BiographyFact]:
        return list(self._biography)
